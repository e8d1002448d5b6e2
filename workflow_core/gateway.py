"""实体网关 - 远端 create/update/delete 边界"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Protocol, Union

import httpx
from pydantic import BaseModel

from .exceptions import NotFoundError, RemoteError
from .resources import ResourceDefinition
from .schema import validate_draft_or_raise

logger = logging.getLogger(__name__)

Draft = Union[BaseModel, Mapping[str, Any]]

ACTOR_HEADER = "X-User-Id"


class EntityGateway(Protocol):
    """远端持久化边界，三个操作均可能失败且可能较慢"""

    async def create(self, draft: Draft) -> str:
        ...

    async def update(self, identity: str, draft: Draft) -> None:
        ...

    async def delete(self, identity: str) -> None:
        ...


def _as_mapping(draft: Draft) -> Dict[str, Any]:
    if isinstance(draft, BaseModel):
        return draft.model_dump()
    return dict(draft)


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("detail"):
        return str(body["detail"])
    return response.reason_phrase


def create_http_client(
    base_url: str,
    actor_id: Optional[str] = None,
    timeout: float = 10.0,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> httpx.AsyncClient:
    """
    创建访问控制台后端的 httpx 客户端

    Args:
        base_url: 后端地址
        actor_id: 当前操作用户ID（通过请求头传递）
        timeout: 请求超时（秒），超时由传输层负责
        transport: 自定义传输（测试中使用 ASGITransport）
    """
    headers = {ACTOR_HEADER: actor_id} if actor_id else {}
    return httpx.AsyncClient(
        base_url=base_url,
        headers=headers,
        timeout=timeout,
        transport=transport,
    )


class HttpEntityGateway:
    """基于 REST 接口的实体网关"""

    def __init__(
        self,
        resource: ResourceDefinition,
        client: httpx.AsyncClient,
        base_path: Optional[str] = None
    ):
        self.resource = resource
        self.client = client
        self.base_path = (base_path or resource.api_path).rstrip("/")

    async def create(self, draft: Draft) -> str:
        """
        创建实体

        Returns:
            服务端分配的实体ID

        Raises:
            ValidationError: 草稿未通过校验（不发起请求）
            RemoteError: 服务端拒绝或网络故障
        """
        record = validate_draft_or_raise(self.resource.draft_model, _as_mapping(draft))
        response = await self._request("POST", self.base_path, json=record.model_dump(mode="json"))

        try:
            identity = response.json().get("id")
        except (ValueError, AttributeError):
            identity = None
        if not identity:
            raise RemoteError("创建响应缺少实体ID", status_code=response.status_code)

        logger.info(f"{self.resource.name} 已创建: {identity}")
        return str(identity)

    async def update(self, identity: str, draft: Draft) -> None:
        """更新实体（修改人/修改时间由服务端写入）"""
        record = validate_draft_or_raise(self.resource.draft_model, _as_mapping(draft))
        await self._request("PUT", f"{self.base_path}/{identity}", json=record.model_dump(mode="json"))
        logger.info(f"{self.resource.name} 已更新: {identity}")

    async def delete(self, identity: str) -> None:
        """删除实体（不可恢复）"""
        await self._request("DELETE", f"{self.base_path}/{identity}")
        logger.info(f"{self.resource.name} 已删除: {identity}")

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"请求失败: {method} {url}, 错误: {e}")
            raise RemoteError(f"请求失败: {e}") from e

        if response.status_code == 404:
            raise NotFoundError(_error_detail(response))
        if response.status_code >= 400:
            raise RemoteError(_error_detail(response), status_code=response.status_code)
        return response

    async def fetch(self, identity: str) -> Dict[str, Any]:
        """读取单个实体（用于打开编辑页）"""
        response = await self._request("GET", f"{self.base_path}/{identity}")
        return response.json()
