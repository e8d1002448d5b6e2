"""编辑工作流控制器 - 表单状态、权限门控、保存/删除生命周期"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Any, Callable, Dict, Mapping, Optional, Union

from pydantic import BaseModel

from .exceptions import ValidationError, WorkflowError
from .gateway import EntityGateway
from .resources import ResourceDefinition
from .schema import validate_draft
from .sinks import (
    NavigationIntent,
    NavigationKind,
    NavigationSink,
    Notification,
    NotificationKind,
    NotificationSink,
)

logger = logging.getLogger(__name__)

Entity = Union[BaseModel, Mapping[str, Any]]


class Lifecycle(str, Enum):
    """生命周期状态（互斥）"""
    IDLE = "idle"
    SAVING = "saving"
    DELETING = "deleting"


class ActionResult(str, Enum):
    """一次用户操作的结果"""
    SKIPPED = "skipped"      # 未提供该操作或正在处理中
    INVALID = "invalid"      # 本地校验失败，未调用网关
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class Capabilities:
    """由外部策略得出的三个权限开关，工作流只读取不计算"""
    can_create: bool = False
    can_update: bool = False
    can_delete: bool = False

    @classmethod
    def none(cls) -> "Capabilities":
        return cls()

    @classmethod
    def all(cls) -> "Capabilities":
        return cls(can_create=True, can_update=True, can_delete=True)


@dataclass(frozen=True)
class FieldBinding:
    """字段绑定：(值, 设置器, 错误)，展示层据此通用渲染"""
    name: str
    value: Any
    error: Optional[str]
    setter: Callable[[Any], bool]


class DeleteConfirmation:
    """删除前的二次确认，只能确认或取消一次"""

    title = "Are you absolutely sure?"
    description = "This action cannot be undone."

    def __init__(self, controller: "EditWorkflowController"):
        self._controller = controller
        self._settled = False

    @property
    def settled(self) -> bool:
        return self._settled

    async def accept(self) -> ActionResult:
        """确认删除"""
        if self._settled:
            return ActionResult.SKIPPED
        self._settled = True
        return await self._controller._delete()

    def cancel(self) -> None:
        """取消删除，不改变任何状态"""
        self._settled = True


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class EditWorkflowController:
    """
    单实体编辑/创建/删除工作流

    示例用法:
        controller = EditWorkflowController(
            TASK_RESOURCE, gateway, Capabilities.all(), notifier, navigator
        )
        controller.set_field("title", "Ship report")
        result = await controller.save()
    """

    def __init__(
        self,
        resource: ResourceDefinition,
        gateway: EntityGateway,
        capabilities: Capabilities,
        notifier: NotificationSink,
        navigator: NavigationSink,
        entity: Optional[Entity] = None
    ):
        """
        初始化控制器

        Args:
            resource: 资源定义
            gateway: 实体网关
            capabilities: 权限开关（构造时确定，不刷新）
            notifier: 通知出口
            navigator: 导航出口
            entity: 已存在的实体；为空时进入创建模式
        """
        self.resource = resource
        self.gateway = gateway
        self.capabilities = capabilities
        self.notifier = notifier
        self.navigator = navigator

        self._entity: Optional[Dict[str, Any]] = None
        self._identity: Optional[str] = None
        if entity is not None:
            self._entity = entity.model_dump() if isinstance(entity, BaseModel) else dict(entity)
            identity = self._entity.get("id")
            if identity in (None, ""):
                raise ValueError(f"{resource.name} 实体缺少 id")
            self._identity = str(identity)

        self._form = self._seed_form()
        self._errors: Dict[str, str] = {}
        self._lifecycle = Lifecycle.IDLE

    def _seed_form(self) -> Dict[str, Any]:
        defaults = self.resource.defaults()
        if self._entity is None:
            return defaults
        form = {}
        for name in self.resource.field_names:
            value = self._entity.get(name)
            form[name] = defaults.get(name) if value is None else _plain(value)
        return form

    # ---- 状态 ----

    @property
    def is_creating(self) -> bool:
        return self._identity is None

    @property
    def identity(self) -> Optional[str]:
        return self._identity

    @property
    def entity(self) -> Optional[Dict[str, Any]]:
        return dict(self._entity) if self._entity is not None else None

    @property
    def lifecycle(self) -> Lifecycle:
        return self._lifecycle

    @property
    def is_saving(self) -> bool:
        return self._lifecycle is Lifecycle.SAVING

    @property
    def is_deleting(self) -> bool:
        return self._lifecycle is Lifecycle.DELETING

    @property
    def is_busy(self) -> bool:
        return self._lifecycle is not Lifecycle.IDLE

    @property
    def form(self) -> Dict[str, Any]:
        return dict(self._form)

    @property
    def errors(self) -> Dict[str, str]:
        return dict(self._errors)

    @property
    def heading(self) -> str:
        if self._entity is None:
            return self.resource.new_heading
        return str(self._entity.get(self.resource.heading_field) or "")

    @property
    def fields(self) -> Dict[str, FieldBinding]:
        return {
            name: FieldBinding(
                name=name,
                value=self._form.get(name),
                error=self._errors.get(name),
                setter=partial(self.set_field, name),
            )
            for name in self.resource.field_names
        }

    # ---- 操作可用性 ----

    @property
    def save_offered(self) -> bool:
        if self.is_creating:
            return self.capabilities.can_create
        return self.capabilities.can_update

    @property
    def delete_offered(self) -> bool:
        return not self.is_creating and self.capabilities.can_delete

    @property
    def new_offered(self) -> bool:
        return not self.is_creating and self.capabilities.can_create

    @property
    def save_enabled(self) -> bool:
        return self.save_offered and not self.is_busy

    @property
    def delete_enabled(self) -> bool:
        return self.delete_offered and not self.is_busy

    @property
    def new_enabled(self) -> bool:
        return self.new_offered and not self.is_busy

    # ---- 操作 ----

    def set_field(self, name: str, value: Any) -> bool:
        """
        写入字段值

        Returns:
            是否写入（保存中输入框禁用，写入被忽略）

        Raises:
            KeyError: 未知字段
        """
        self.resource.field_spec(name)
        if self.is_saving:
            return False
        self._form[name] = _plain(value)
        return True

    async def save(self) -> ActionResult:
        """校验并保存草稿（创建模式成功后跳转到详情页）"""
        if not self.save_enabled:
            logger.debug(f"保存不可用: {self.resource.name}, 状态: {self._lifecycle.value}")
            return ActionResult.SKIPPED

        record, errors = validate_draft(self.resource.draft_model, self._form)
        self._errors = errors
        if record is None:
            logger.info(f"{self.resource.name} 校验未通过: {sorted(errors)}")
            return ActionResult.INVALID

        self._lifecycle = Lifecycle.SAVING
        logger.info(f"开始保存 {self.resource.name}: {self._identity or '<new>'}")
        created: Optional[str] = None
        try:
            if self.is_creating:
                created = await self.gateway.create(record)
            else:
                await self.gateway.update(self._identity, record)
                self._entity.update(record.model_dump(mode="json"))
        except ValidationError as e:
            self._errors = dict(e.errors)
            result = self._fail(self.resource.save_failed_title, e)
        except WorkflowError as e:
            result = self._fail(self.resource.save_failed_title, e)
        except Exception as e:
            logger.error(f"保存出现未预期错误: {self.resource.name}, 错误: {e}", exc_info=True)
            result = self._fail(self.resource.save_failed_title, e)
        else:
            if created is not None:
                # 已持久化：标识固定下来，之后的保存走 update
                self._identity = created
                self._entity = {**record.model_dump(mode="json"), "id": created}
            self.notifier.notify(Notification(
                kind=NotificationKind.SUCCESS,
                title=self.resource.saved_title,
            ))
            result = ActionResult.SUCCEEDED
        finally:
            self._lifecycle = Lifecycle.IDLE

        logger.info(f"保存结束 {self.resource.name}: {result.value}")
        if created is not None and result is ActionResult.SUCCEEDED:
            self.navigator.navigate(NavigationIntent(
                kind=NavigationKind.DETAIL,
                path=self.resource.detail_path(created),
                replace=True,
            ))
        return result

    def request_delete(self) -> Optional[DeleteConfirmation]:
        """打开删除确认；操作不可用时返回 None"""
        if not self.delete_enabled:
            return None
        return DeleteConfirmation(self)

    async def _delete(self) -> ActionResult:
        if not self.delete_enabled:
            return ActionResult.SKIPPED

        self._lifecycle = Lifecycle.DELETING
        logger.info(f"开始删除 {self.resource.name}: {self._identity}")
        try:
            await self.gateway.delete(self._identity)
        except WorkflowError as e:
            result = self._fail(self.resource.delete_failed_title, e)
        except Exception as e:
            logger.error(f"删除出现未预期错误: {self.resource.name}, 错误: {e}", exc_info=True)
            result = self._fail(self.resource.delete_failed_title, e)
        else:
            self.notifier.notify(Notification(
                kind=NotificationKind.SUCCESS,
                title=self.resource.deleted_title,
            ))
            self.navigator.navigate(NavigationIntent(
                kind=NavigationKind.LIST,
                path=self.resource.collection_path,
            ))
            result = ActionResult.SUCCEEDED
        finally:
            self._lifecycle = Lifecycle.IDLE

        logger.info(f"删除结束 {self.resource.name}: {result.value}")
        return result

    def _fail(self, title: str, error: Exception) -> ActionResult:
        logger.warning(f"{title}: {error}")
        self.notifier.notify(Notification(
            kind=NotificationKind.FAILURE,
            title=title,
            description=str(error) or None,
        ))
        return ActionResult.FAILED

    def navigate_new(self) -> bool:
        """前往新的创建页（不保存当前修改）"""
        if not self.new_enabled:
            return False
        self.navigator.navigate(NavigationIntent(
            kind=NavigationKind.NEW,
            path=self.resource.new_path,
        ))
        return True

    def go_back(self) -> None:
        """返回上一步（不受权限控制）"""
        self.navigator.navigate(NavigationIntent(kind=NavigationKind.BACK))
