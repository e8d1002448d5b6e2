"""实体可编辑字段的校验模型"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Annotated, Any, Dict, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError
from .formatting import generate_label

logger = logging.getLogger(__name__)

DraftT = TypeVar("DraftT", bound=BaseModel)

NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]
EmailText = Annotated[
    str,
    StringConstraints(strip_whitespace=True, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$"),
]


class TaskStatus(str, Enum):
    """任务状态枚举（第一个成员为默认值）"""
    TODO = "Todo"
    IN_PROGRESS = "InProgress"
    DONE = "Done"


class UserRole(str, Enum):
    """用户角色枚举"""
    ADMIN = "Admin"
    USER = "User"


class TaskDraft(BaseModel):
    """任务草稿"""
    model_config = ConfigDict(extra="ignore")

    title: NonEmptyStr = Field(..., description="任务标题")
    status: TaskStatus = Field(..., description="任务状态")
    description: Optional[str] = Field(None, description="任务描述（可选）")


class UserDraft(BaseModel):
    """用户草稿"""
    model_config = ConfigDict(extra="ignore")

    name: NonEmptyStr = Field(..., description="用户名称")
    email: EmailText = Field(..., description="邮箱地址")
    role: UserRole = Field(..., description="用户角色")
    image: Optional[str] = Field(None, description="头像地址（可选）")


def _enum_for(model: Type[BaseModel], field: str) -> Optional[Type[Enum]]:
    info = model.model_fields.get(field)
    annotation = getattr(info, "annotation", None)
    if isinstance(annotation, type) and issubclass(annotation, Enum):
        return annotation
    return None


def _message_for(model: Type[BaseModel], field: str, error: Dict[str, Any]) -> str:
    """将 pydantic 错误转换为可读的字段提示"""
    label = generate_label(field)
    error_type = error.get("type", "")

    if error_type in ("missing", "string_too_short") or error.get("input") is None:
        return f"{label} is required"

    enum_cls = _enum_for(model, field)
    if enum_cls is not None:
        choices = ", ".join(generate_label(member.value) for member in enum_cls)
        return f"{label} must be one of: {choices}"

    if error_type == "string_pattern_mismatch" and field == "email":
        return "Enter a valid email address"

    if error_type == "string_type":
        return f"{label} must be text"

    return str(error.get("msg", "Invalid value"))


def validate_draft(
    model: Type[DraftT],
    values: Mapping[str, Any]
) -> Tuple[Optional[DraftT], Dict[str, str]]:
    """
    校验表单草稿

    Args:
        model: 草稿模型（如 TaskDraft）
        values: 字段名 -> 值 的映射，未知字段会被忽略

    Returns:
        (校验后的记录, {}) 或 (None, 字段名 -> 错误信息)
    """
    try:
        return model.model_validate(dict(values)), {}
    except PydanticValidationError as e:
        errors: Dict[str, str] = {}
        for item in e.errors():
            loc = item.get("loc") or ("__root__",)
            field = str(loc[0])
            # 每个字段只保留第一条错误
            errors.setdefault(field, _message_for(model, field, item))
        logger.debug(f"草稿校验失败: {model.__name__}, 字段: {sorted(errors)}")
        return None, errors


def validate_draft_or_raise(model: Type[DraftT], values: Mapping[str, Any]) -> DraftT:
    """校验草稿，失败时抛出 ValidationError"""
    record, errors = validate_draft(model, values)
    if record is None:
        raise ValidationError(errors)
    return record
