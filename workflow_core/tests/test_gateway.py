"""HTTP 实体网关测试用例"""

import json

import httpx
import pytest

from workflow_core.exceptions import NotFoundError, RemoteError, ValidationError
from workflow_core.gateway import ACTOR_HEADER, HttpEntityGateway, create_http_client
from workflow_core.resources import TASK_RESOURCE
from workflow_core.schema import TaskDraft, TaskStatus


class Recorder:
    """记录请求并返回预设响应的 MockTransport 处理器"""

    def __init__(self, status_code=200, payload=None, error=None):
        self.status_code = status_code
        self.payload = payload if payload is not None else {}
        self.error = error
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json=self.payload)


def make_gateway(recorder, actor_id="admin"):
    client = create_http_client(
        "http://console.test",
        actor_id=actor_id,
        transport=httpx.MockTransport(recorder),
    )
    return HttpEntityGateway(TASK_RESOURCE, client)


VALID_DRAFT = {"title": "Ship report", "status": "InProgress", "description": ""}


class TestHttpEntityGateway:
    """测试网关请求与错误映射"""

    @pytest.mark.asyncio
    async def test_create_returns_identity(self):
        """测试创建返回服务端分配的 ID"""
        recorder = Recorder(status_code=201, payload={"id": "42"})
        gateway = make_gateway(recorder)

        identity = await gateway.create(VALID_DRAFT)

        assert identity == "42"
        request = recorder.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/api/tasks"
        assert request.headers[ACTOR_HEADER] == "admin"
        assert json.loads(request.content) == {
            "title": "Ship report",
            "status": "InProgress",
            "description": "",
        }

    @pytest.mark.asyncio
    async def test_create_accepts_model(self):
        """测试创建接受已校验的模型"""
        recorder = Recorder(status_code=201, payload={"id": 9})
        gateway = make_gateway(recorder)

        identity = await gateway.create(TaskDraft(title="t", status=TaskStatus.DONE))

        assert identity == "9"

    @pytest.mark.asyncio
    async def test_invalid_draft_not_sent(self):
        """测试非法草稿不会发出请求"""
        recorder = Recorder()
        gateway = make_gateway(recorder)

        with pytest.raises(ValidationError) as exc_info:
            await gateway.create({"title": "", "status": "Todo"})

        assert exc_info.value.errors == {"title": "Title is required"}
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_create_without_identity(self):
        """测试创建响应缺少 ID"""
        gateway = make_gateway(Recorder(status_code=201, payload={}))

        with pytest.raises(RemoteError):
            await gateway.create(VALID_DRAFT)

    @pytest.mark.asyncio
    async def test_update_and_delete_paths(self):
        """测试更新与删除的请求路径"""
        recorder = Recorder(payload={"message": "ok"})
        gateway = make_gateway(recorder)

        await gateway.update("7", VALID_DRAFT)
        await gateway.delete("7")

        assert [(r.method, r.url.path) for r in recorder.requests] == [
            ("PUT", "/api/tasks/7"),
            ("DELETE", "/api/tasks/7"),
        ]

    @pytest.mark.asyncio
    async def test_not_found(self):
        """测试 404 映射为 NotFoundError"""
        gateway = make_gateway(Recorder(status_code=404, payload={"detail": "任务不存在"}))

        with pytest.raises(NotFoundError) as exc_info:
            await gateway.delete("7")

        assert isinstance(exc_info.value, RemoteError)
        assert str(exc_info.value) == "任务不存在"

    @pytest.mark.asyncio
    async def test_server_rejection(self):
        """测试服务端拒绝映射为 RemoteError"""
        gateway = make_gateway(Recorder(status_code=403, payload={"detail": "无权限"}))

        with pytest.raises(RemoteError) as exc_info:
            await gateway.update("7", VALID_DRAFT)

        assert exc_info.value.status_code == 403
        assert not isinstance(exc_info.value, NotFoundError)

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        """测试网络故障映射为 RemoteError"""
        gateway = make_gateway(Recorder(error=httpx.ConnectError("refused")))

        with pytest.raises(RemoteError):
            await gateway.delete("7")

    @pytest.mark.asyncio
    async def test_fetch(self):
        """测试读取实体"""
        recorder = Recorder(payload={"id": "7", "title": "Write tests"})
        gateway = make_gateway(recorder)

        entity = await gateway.fetch("7")

        assert entity["title"] == "Write tests"
        assert recorder.requests[0].url.path == "/api/tasks/7"
