"""编辑工作流与控制台后端联调测试"""

import httpx
import pytest

from admin_console.api import deps
from admin_console.config import settings
from admin_console.main import app
from workflow_core import (
    ActionResult,
    Capabilities,
    NavigationKind,
    NotificationKind,
    WorkflowCore,
    create_http_client,
)


@pytest.fixture
def seeded():
    """重置存储并写入管理员与普通用户（ASGITransport 不触发 lifespan）"""
    deps.task_store.clear()
    deps.user_store.clear()
    admin = deps.user_service.seed_admin(
        settings.seed_admin_id, settings.seed_admin_name, settings.seed_admin_email
    )
    return admin


def make_client(actor_id):
    return create_http_client(
        "http://console.test",
        actor_id=actor_id,
        transport=httpx.ASGITransport(app=app),
    )


class TestTaskWorkflow:
    """测试任务编辑页完整流程"""

    @pytest.mark.asyncio
    async def test_create_update_delete(self, seeded):
        """测试 创建 -> 编辑 -> 删除"""
        async with make_client(seeded.id) as client:
            core = WorkflowCore(client)
            capabilities = await core.load_capabilities("task")

            creator = core.open_editor("task", capabilities)
            creator.set_field("title", "Ship report")
            creator.set_field("status", "InProgress")
            assert await creator.save() is ActionResult.SUCCEEDED

            intent = core.navigator.last
            assert intent.kind is NavigationKind.DETAIL
            identity = intent.path.rsplit("/", 1)[-1]
            assert intent.path == f"/tasks/{identity}"

            task = await core.load("task", identity)
            editor = core.open_editor("task", capabilities, entity=task)
            assert editor.heading == "Ship report"

            editor.set_field("status", "Done")
            assert await editor.save() is ActionResult.SUCCEEDED
            assert (await core.load("task", identity))["status"] == "Done"

            view = core.view(editor)
            assert view.system_info[3].value == settings.seed_admin_name

            assert await editor.request_delete().accept() is ActionResult.SUCCEEDED
            assert core.navigator.last.path == "/tasks"

            # 已删除的实体再次删除：普通失败通知，不跳转
            navigations = len(core.navigator.intents)
            assert await editor.request_delete().accept() is ActionResult.FAILED
            assert len(core.navigator.intents) == navigations

            kinds = [n.kind for n in core.notifier.notifications]
            assert kinds == [
                NotificationKind.SUCCESS,
                NotificationKind.SUCCESS,
                NotificationKind.SUCCESS,
                NotificationKind.FAILURE,
            ]
            assert core.notifier.notifications[-1].title == "Error deleting task"

    @pytest.mark.asyncio
    async def test_server_denial_surfaces_failure(self, seeded):
        """测试服务端拒绝时保留表单并通知失败"""
        async with make_client(seeded.id) as admin_client:
            admin_core = WorkflowCore(admin_client)
            creator = admin_core.open_editor("user", await admin_core.load_capabilities("user"))
            creator.set_field("name", "Grace")
            creator.set_field("email", "grace@example.com")
            assert await creator.save() is ActionResult.SUCCEEDED
            member_id = admin_core.navigator.last.path.rsplit("/", 1)[-1]

        async with make_client(member_id) as client:
            core = WorkflowCore(client)
            capabilities = await core.load_capabilities("user")
            assert not capabilities.can_create

            # 即使展示层误传权限，服务端仍然拒绝
            editor = core.open_editor("user", Capabilities.all())
            editor.set_field("name", "Eve")
            editor.set_field("email", "eve@example.com")
            before = editor.form

            assert await editor.save() is ActionResult.FAILED
            assert editor.form == before
            assert core.notifier.notifications[-1].title == "Error saving user"
            assert core.navigator.intents == []
