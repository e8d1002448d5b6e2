from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRef(BaseModel):
    """用户引用（创建人/修改人）"""
    id: str = Field(..., description="用户ID")
    name: Optional[str] = Field(None, description="用户名称")


class CreateResponse(BaseModel):
    """创建响应"""
    id: str = Field(..., description="服务端分配的实体ID")
    message: str = Field(default="已创建", description="响应消息")
