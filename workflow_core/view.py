"""展示层视图模型 - 由控制器状态生成可序列化的页面描述"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Mapping, Optional, Tuple

from pydantic import BaseModel, Field

from .controller import DeleteConfirmation, EditWorkflowController
from .formatting import format_date_time, times_ago
from .resources import FieldKind

UNKNOWN_NAME = "Unknown"


class ButtonView(BaseModel):
    """按钮状态"""
    label: str
    icon: str
    visible: bool = True
    disabled: bool = False
    busy: bool = Field(default=False, description="是否显示加载动画")


class OptionView(BaseModel):
    value: str
    label: str


class FieldView(BaseModel):
    """表单字段描述"""
    name: str
    label: str
    kind: FieldKind
    placeholder: str = ""
    options: List[OptionView] = Field(default_factory=list)
    value: Any = None
    error: Optional[str] = None
    disabled: bool = False


class InfoItem(BaseModel):
    """只读元信息行"""
    label: str
    value: Optional[str] = None
    href: Optional[str] = None


class DialogView(BaseModel):
    title: str
    description: str
    cancel_label: str = "Cancel"
    confirm_label: str = "Continue"


class AvatarView(BaseModel):
    image: Optional[str] = None
    alt: str = "Picture"
    fallback_icon: Optional[str] = None
    sr_label: Optional[str] = None


class EditView(BaseModel):
    """编辑页完整描述"""
    heading: str
    lifecycle: str
    buttons: List[ButtonView]
    fields: List[FieldView]
    delete_dialog: Optional[DialogView] = None
    system_info: List[InfoItem] = Field(default_factory=list)


def _get(source: Any, key: str) -> Any:
    if source is None:
        return None
    if isinstance(source, Mapping):
        return source.get(key)
    return getattr(source, key, None)


def _as_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def _user_link(label: str, user: Any) -> InfoItem:
    user_id = _get(user, "id")
    return InfoItem(
        label=label,
        value=_get(user, "name") or UNKNOWN_NAME,
        href=f"/users/{user_id}" if user_id else None,
    )


def build_system_info(entity: Any, now: Optional[datetime] = None) -> List[InfoItem]:
    """生成已持久化实体的只读元信息"""
    return [
        InfoItem(label="Id", value=str(_get(entity, "id"))),
        InfoItem(label="Created At", value=format_date_time(_as_datetime(_get(entity, "created_at")))),
        InfoItem(label="Updated At", value=times_ago(_as_datetime(_get(entity, "updated_at")), now=now)),
        _user_link("Created By", _get(entity, "created_by")),
        _user_link("Updated By", _get(entity, "updated_by")),
    ]


def build_buttons(controller: EditWorkflowController) -> List[ButtonView]:
    busy = controller.is_busy
    return [
        ButtonView(label="Back", icon="chevronLeft"),
        ButtonView(
            label="Save",
            icon="spinner" if controller.is_saving else "save",
            visible=controller.save_offered,
            disabled=busy,
            busy=controller.is_saving,
        ),
        ButtonView(
            label="Delete",
            icon="spinner" if controller.is_deleting else "delete",
            visible=controller.delete_offered,
            disabled=busy,
            busy=controller.is_deleting,
        ),
        ButtonView(
            label="New",
            icon="add",
            visible=controller.new_offered,
            disabled=busy,
        ),
    ]


def _options(options: Tuple[Tuple[str, str], ...]) -> List[OptionView]:
    return [OptionView(value=value, label=label) for value, label in options]


def build_edit_view(controller: EditWorkflowController, now: Optional[datetime] = None) -> EditView:
    """
    根据控制器状态生成编辑页视图

    Args:
        controller: 编辑工作流控制器
        now: 相对时间参考点（测试中固定）

    Returns:
        EditView
    """
    fields = []
    for name, binding in controller.fields.items():
        spec = controller.resource.field_spec(name)
        fields.append(FieldView(
            name=name,
            label=spec.label,
            kind=spec.kind,
            placeholder=spec.placeholder,
            options=_options(spec.options),
            value=binding.value,
            error=binding.error,
            disabled=controller.is_saving,
        ))

    dialog = None
    if controller.delete_offered:
        dialog = DialogView(
            title=DeleteConfirmation.title,
            description=DeleteConfirmation.description,
        )

    return EditView(
        heading=controller.heading,
        lifecycle=controller.lifecycle.value,
        buttons=build_buttons(controller),
        fields=fields,
        delete_dialog=dialog,
        system_info=[] if controller.is_creating else build_system_info(controller.entity, now=now),
    )


def avatar_for(user: Any) -> AvatarView:
    """用户头像：有图片时显示图片，否则显示占位图标"""
    image = _get(user, "image")
    if image:
        return AvatarView(image=image)
    return AvatarView(fallback_icon="user", sr_label=_get(user, "name"))
