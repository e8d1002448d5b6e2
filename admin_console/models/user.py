from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional
import uuid

from workflow_core.schema import UserRole
from .common import UserRef, utcnow


class User(BaseModel):
    """用户模型"""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="用户ID")
    name: str = Field(..., description="用户名称")
    email: str = Field(..., description="邮箱地址")
    role: UserRole = Field(default=UserRole.USER, description="用户角色")
    image: Optional[str] = Field(None, description="头像地址")
    created_at: datetime = Field(default_factory=utcnow, description="创建时间")
    updated_at: datetime = Field(default_factory=utcnow, description="最后修改时间")
    created_by: Optional[UserRef] = Field(None, description="创建人（初始管理员为空）")
    updated_by: Optional[UserRef] = Field(None, description="最后修改人")

    def ref(self) -> UserRef:
        return UserRef(id=self.id, name=self.name)


class SessionInfo(BaseModel):
    """当前会话：用户与各资源权限"""
    user: User
    capabilities: dict = Field(default_factory=dict, description="资源名 -> 三个权限开关")
