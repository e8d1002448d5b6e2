"""路由共享的存储、服务与依赖"""

from typing import Optional

from fastapi import Header, HTTPException

from ..models.user import User
from ..services.capabilities import capabilities_for
from ..services.task_service import TaskService
from ..services.user_service import UserService
from ..storage.memory_store import TaskStore, UserStore

task_store = TaskStore()
user_store = UserStore()
task_service = TaskService(task_store)
user_service = UserService(user_store)


async def get_current_user(x_user_id: Optional[str] = Header(None, description="当前操作用户ID")) -> User:
    """从请求头识别当前用户（不做凭证校验）"""
    user = user_service.find_user(x_user_id)
    if not user:
        raise HTTPException(status_code=401, detail="未登录或用户不存在")
    return user


def ensure_capability(user: User, resource: str, action: str) -> None:
    """
    服务端权限校验

    Args:
        user: 当前用户
        resource: 资源名（task/user）
        action: create/update/delete

    Raises:
        HTTPException: 403 无权限
    """
    flags = capabilities_for(user.role, resource)
    if not getattr(flags, f"can_{action}", False):
        raise HTTPException(status_code=403, detail=f"无权限执行 {resource}.{action}")
