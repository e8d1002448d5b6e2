"""资源定义 - 参数化通用编辑工作流"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Tuple, Type

from pydantic import BaseModel

from .formatting import generate_label
from .schema import TaskDraft, TaskStatus, UserDraft, UserRole


class FieldKind(str, Enum):
    """表单控件类型"""
    TEXT = "text"
    SELECT = "select"
    TEXTAREA = "textarea"


@dataclass(frozen=True)
class FieldSpec:
    """单个可编辑字段的展示描述"""
    name: str
    label: str
    kind: FieldKind = FieldKind.TEXT
    placeholder: str = ""
    options: Tuple[Tuple[str, str], ...] = ()  # (value, label)


def enum_options(enum_cls: Type[Enum]) -> Tuple[Tuple[str, str], ...]:
    return tuple((member.value, generate_label(member.value)) for member in enum_cls)


@dataclass(frozen=True)
class ResourceDefinition:
    """
    一种资源（task、user 等）在工作流中的全部差异点

    Attributes:
        name: 资源标识（如 'task'）
        singular: 单数展示名（如 'Task'）
        collection_path: 列表页路径（如 '/tasks'）
        draft_model: 草稿校验模型
        fields: 有序字段描述
        default_factory: 创建模式下的默认草稿
        heading_field: 编辑模式标题取值字段
    """
    name: str
    singular: str
    collection_path: str
    draft_model: Type[BaseModel]
    fields: Tuple[FieldSpec, ...]
    default_factory: Callable[[], Dict[str, Any]]
    heading_field: str
    api_path: str = ""
    _field_index: Dict[str, FieldSpec] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_field_index", {f.name: f for f in self.fields})

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    def field_spec(self, name: str) -> FieldSpec:
        try:
            return self._field_index[name]
        except KeyError:
            raise KeyError(f"{self.name} 没有字段: {name}")

    def defaults(self) -> Dict[str, Any]:
        return dict(self.default_factory())

    def detail_path(self, identity: str) -> str:
        return f"{self.collection_path}/{identity}"

    @property
    def new_path(self) -> str:
        return f"{self.collection_path}/new"

    @property
    def new_heading(self) -> str:
        return f"New {self.singular}"

    # 通知标题
    @property
    def saved_title(self) -> str:
        return f"{self.singular} saved"

    @property
    def save_failed_title(self) -> str:
        return f"Error saving {self.singular.lower()}"

    @property
    def deleted_title(self) -> str:
        return f"{self.singular} deleted"

    @property
    def delete_failed_title(self) -> str:
        return f"Error deleting {self.singular.lower()}"


TASK_RESOURCE = ResourceDefinition(
    name="task",
    singular="Task",
    collection_path="/tasks",
    api_path="/api/tasks",
    draft_model=TaskDraft,
    fields=(
        FieldSpec("title", "Title", FieldKind.TEXT, "Enter a title"),
        FieldSpec("status", "Status", FieldKind.SELECT, "Select status", enum_options(TaskStatus)),
        FieldSpec("description", "Description", FieldKind.TEXTAREA, "Enter description here"),
    ),
    default_factory=lambda: {
        "title": "",
        "status": list(TaskStatus)[0].value,
        "description": "",
    },
    heading_field="title",
)

USER_RESOURCE = ResourceDefinition(
    name="user",
    singular="User",
    collection_path="/users",
    api_path="/api/users",
    draft_model=UserDraft,
    fields=(
        FieldSpec("name", "Name", FieldKind.TEXT, "Enter a name"),
        FieldSpec("email", "Email", FieldKind.TEXT, "Enter an email address"),
        FieldSpec("role", "Role", FieldKind.SELECT, "Select role", enum_options(UserRole)),
        FieldSpec("image", "Image", FieldKind.TEXT, "Enter an image URL"),
    ),
    default_factory=lambda: {
        "name": "",
        "email": "",
        "role": UserRole.USER.value,
        "image": "",
    },
    heading_field="name",
)

_RESOURCES: Dict[str, ResourceDefinition] = {
    TASK_RESOURCE.name: TASK_RESOURCE,
    USER_RESOURCE.name: USER_RESOURCE,
}


def get_resource(name: str) -> ResourceDefinition:
    """按名称查找资源定义（未知名称抛出 KeyError）"""
    return _RESOURCES[name]


def list_resources() -> List[ResourceDefinition]:
    return list(_RESOURCES.values())
