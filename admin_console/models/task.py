from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional
import uuid

from workflow_core.schema import TaskStatus
from .common import UserRef, utcnow


class Task(BaseModel):
    """任务模型"""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="任务ID")
    title: str = Field(..., description="任务标题")
    status: TaskStatus = Field(default=TaskStatus.TODO, description="任务状态")
    description: Optional[str] = Field(None, description="任务描述")
    created_at: datetime = Field(default_factory=utcnow, description="创建时间")
    updated_at: datetime = Field(default_factory=utcnow, description="最后修改时间")
    created_by: UserRef = Field(..., description="创建人")
    updated_by: UserRef = Field(..., description="最后修改人")
