"""编辑工作流核心包 - 通用单实体 创建/编辑/删除 流程

提供草稿校验、实体网关、工作流控制器、通知/导航出口与视图模型。
"""

from typing import Dict, Optional, Union

import httpx

from .controller import (
    ActionResult,
    Capabilities,
    DeleteConfirmation,
    EditWorkflowController,
    FieldBinding,
    Lifecycle,
)
from .exceptions import NotFoundError, RemoteError, ValidationError, WorkflowError
from .gateway import EntityGateway, HttpEntityGateway, create_http_client
from .resources import TASK_RESOURCE, USER_RESOURCE, ResourceDefinition, get_resource
from .schema import TaskDraft, TaskStatus, UserDraft, UserRole, validate_draft
from .sinks import (
    CollectingNavigator,
    CollectingNotifier,
    NavigationIntent,
    NavigationKind,
    NavigationSink,
    Notification,
    NotificationKind,
    NotificationSink,
)
from .view import EditView, build_edit_view


__version__ = "0.1.0"
__all__ = [
    "WorkflowCore",
    "ActionResult",
    "Capabilities",
    "DeleteConfirmation",
    "EditWorkflowController",
    "FieldBinding",
    "Lifecycle",
    "EntityGateway",
    "HttpEntityGateway",
    "create_http_client",
    "ResourceDefinition",
    "TASK_RESOURCE",
    "USER_RESOURCE",
    "get_resource",
    "TaskDraft",
    "TaskStatus",
    "UserDraft",
    "UserRole",
    "validate_draft",
    "CollectingNavigator",
    "CollectingNotifier",
    "NavigationIntent",
    "NavigationKind",
    "NavigationSink",
    "Notification",
    "NotificationKind",
    "NotificationSink",
    "EditView",
    "build_edit_view",
    "WorkflowError",
    "ValidationError",
    "RemoteError",
    "NotFoundError",
]

ResourceRef = Union[str, ResourceDefinition]


class WorkflowCore:
    """
    工作流核心类 - 统一的编辑页入口

    示例用法:
        client = create_http_client("http://localhost:8000", actor_id=user_id)
        core = WorkflowCore(client)

        # 新建任务
        capabilities = await core.load_capabilities("task")
        editor = core.open_editor("task", capabilities)

        # 编辑已有任务
        task = await core.load("task", task_id)
        editor = core.open_editor("task", capabilities, entity=task)
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        notifier: Optional[NotificationSink] = None,
        navigator: Optional[NavigationSink] = None,
        session_path: str = "/api/session"
    ):
        """
        初始化 WorkflowCore

        Args:
            client: 访问后端的 httpx 客户端
            notifier: 通知出口（默认收集到内存）
            navigator: 导航出口（默认收集到内存）
            session_path: 会话/权限接口路径
        """
        self.client = client
        self.notifier = notifier if notifier is not None else CollectingNotifier()
        self.navigator = navigator if navigator is not None else CollectingNavigator()
        self.session_path = session_path
        self._gateways: Dict[str, HttpEntityGateway] = {}

    @staticmethod
    def _resolve(resource: ResourceRef) -> ResourceDefinition:
        return get_resource(resource) if isinstance(resource, str) else resource

    def gateway(self, resource: ResourceRef) -> HttpEntityGateway:
        """获取资源对应的网关（按资源缓存）"""
        definition = self._resolve(resource)
        if definition.name not in self._gateways:
            self._gateways[definition.name] = HttpEntityGateway(definition, self.client)
        return self._gateways[definition.name]

    async def load(self, resource: ResourceRef, identity: str) -> dict:
        """
        读取已有实体

        Raises:
            NotFoundError: 实体不存在
            RemoteError: 请求失败
        """
        return await self.gateway(resource).fetch(identity)

    async def load_capabilities(self, resource: ResourceRef) -> Capabilities:
        """从会话接口读取当前用户对资源的三个权限开关"""
        definition = self._resolve(resource)
        try:
            response = await self.client.get(self.session_path)
        except httpx.HTTPError as e:
            raise RemoteError(f"读取会话失败: {e}") from e
        if response.status_code >= 400:
            raise RemoteError("读取会话失败", status_code=response.status_code)

        flags = response.json().get("capabilities", {}).get(definition.name) or {}
        return Capabilities(
            can_create=bool(flags.get("can_create")),
            can_update=bool(flags.get("can_update")),
            can_delete=bool(flags.get("can_delete")),
        )

    def open_editor(
        self,
        resource: ResourceRef,
        capabilities: Capabilities,
        entity: Optional[dict] = None
    ) -> EditWorkflowController:
        """
        打开编辑工作流

        Args:
            resource: 资源名或资源定义
            capabilities: 权限开关
            entity: 已有实体（为空时为创建模式）

        Returns:
            EditWorkflowController 实例（各实例互不共享可变状态）
        """
        definition = self._resolve(resource)
        return EditWorkflowController(
            resource=definition,
            gateway=self.gateway(definition),
            capabilities=capabilities,
            notifier=self.notifier,
            navigator=self.navigator,
            entity=entity,
        )

    def view(self, controller: EditWorkflowController) -> EditView:
        """生成编辑页视图"""
        return build_edit_view(controller)
