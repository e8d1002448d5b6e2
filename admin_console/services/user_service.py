import logging
from typing import List, Optional

from workflow_core.exceptions import NotFoundError
from workflow_core.schema import UserDraft, UserRole
from ..models.common import utcnow
from ..models.user import User
from ..storage.memory_store import UserStore

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, store: UserStore):
        self.store = store

    def seed_admin(self, user_id: str, name: str, email: str) -> User:
        """确保存在一个初始管理员（固定ID，无创建人）"""
        existing = self.store.get(user_id) or self.store.find_by_email(email)
        if existing:
            return existing
        admin = User(id=user_id, name=name, email=email, role=UserRole.ADMIN)
        self.store.save(admin)
        logger.info(f"初始管理员已创建: {admin.id}")
        return admin

    def find_user(self, user_id: Optional[str]) -> Optional[User]:
        if not user_id:
            return None
        return self.store.get(user_id)

    async def create_user(self, draft: UserDraft, actor: User) -> User:
        """
        创建用户

        Raises:
            ValueError: 邮箱已被使用
        """
        if self.store.find_by_email(draft.email):
            raise ValueError(f"邮箱已被使用: {draft.email}")
        user = User(
            name=draft.name,
            email=draft.email,
            role=draft.role,
            image=draft.image or None,
            created_by=actor.ref(),
            updated_by=actor.ref(),
        )
        self.store.save(user)
        logger.info(f"用户已创建: {user.id}, 创建人: {actor.id}")
        return user

    async def get_user(self, user_id: str) -> User:
        user = self.store.get(user_id)
        if not user:
            raise NotFoundError(f"用户不存在: {user_id}")
        return user

    async def list_users(self) -> List[User]:
        return sorted(self.store.list_all(), key=lambda u: u.name.lower())

    async def update_user(self, user_id: str, draft: UserDraft, actor: User) -> User:
        """
        更新用户

        Raises:
            NotFoundError: 用户不存在
            ValueError: 邮箱已被其他用户使用
        """
        user = await self.get_user(user_id)
        owner = self.store.find_by_email(draft.email)
        if owner and owner.id != user_id:
            raise ValueError(f"邮箱已被使用: {draft.email}")
        updated = user.model_copy(update={
            "name": draft.name,
            "email": draft.email,
            "role": draft.role,
            "image": draft.image or None,
            "updated_at": utcnow(),
            "updated_by": actor.ref(),
        })
        self.store.save(updated)
        logger.info(f"用户已更新: {user_id}, 修改人: {actor.id}")
        return updated

    async def delete_user(self, user_id: str, actor: User) -> None:
        """
        删除用户

        Raises:
            NotFoundError: 用户不存在
            ValueError: 不能删除自己
        """
        if user_id == actor.id:
            raise ValueError("不能删除当前登录用户")
        if not self.store.delete(user_id):
            raise NotFoundError(f"用户不存在: {user_id}")
        logger.info(f"用户已删除: {user_id}")
