"""草稿校验与格式化工具测试用例"""

from datetime import datetime, timedelta, timezone

import pytest

from workflow_core.exceptions import ValidationError
from workflow_core.formatting import format_date_time, generate_label, times_ago
from workflow_core.resources import TASK_RESOURCE, USER_RESOURCE, get_resource
from workflow_core.schema import (
    TaskDraft,
    TaskStatus,
    UserDraft,
    UserRole,
    validate_draft,
    validate_draft_or_raise,
)


class TestTaskDraft:
    """测试任务草稿校验"""

    def test_valid_draft(self):
        """测试合法草稿"""
        record, errors = validate_draft(TaskDraft, {
            "title": "Ship report",
            "status": "InProgress",
            "description": "",
        })
        assert errors == {}
        assert record.title == "Ship report"
        assert record.status is TaskStatus.IN_PROGRESS
        assert record.description == ""

    def test_description_optional(self):
        """测试描述可省略"""
        record, errors = validate_draft(TaskDraft, {"title": "t", "status": "Done"})
        assert errors == {}
        assert record.description is None

    @pytest.mark.parametrize("title", ["", None])
    def test_title_required(self, title):
        """测试标题为空"""
        record, errors = validate_draft(TaskDraft, {"title": title, "status": "Todo"})
        assert record is None
        assert errors == {"title": "Title is required"}

    def test_title_kept_as_typed(self):
        """测试标题原样保留，空白不被去除"""
        record, errors = validate_draft(TaskDraft, {"title": "  padded  ", "status": "Todo"})
        assert errors == {}
        assert record.title == "  padded  "

        record, errors = validate_draft(TaskDraft, {"title": "   ", "status": "Todo"})
        assert errors == {}
        assert record.title == "   "

    def test_missing_title(self):
        """测试缺少标题"""
        _, errors = validate_draft(TaskDraft, {"status": "Todo"})
        assert errors == {"title": "Title is required"}

    def test_status_outside_enum(self):
        """测试状态不在枚举内"""
        _, errors = validate_draft(TaskDraft, {"title": "t", "status": "Blocked"})
        assert errors == {"status": "Status must be one of: Todo, In Progress, Done"}

    def test_unknown_keys_ignored(self):
        """测试未知字段被忽略"""
        record, errors = validate_draft(TaskDraft, {"title": "t", "status": "Todo", "id": "9"})
        assert errors == {}
        assert not hasattr(record, "id")

    def test_first_status_is_default(self):
        """测试默认状态为第一个枚举值"""
        assert TASK_RESOURCE.defaults()["status"] == "Todo"
        assert list(TaskStatus)[0] is TaskStatus.TODO

    def test_validate_or_raise(self):
        """测试校验失败抛出异常"""
        with pytest.raises(ValidationError) as exc_info:
            validate_draft_or_raise(TaskDraft, {"title": "", "status": "Todo"})
        assert exc_info.value.errors == {"title": "Title is required"}


class TestUserDraft:
    """测试用户草稿校验"""

    def test_valid_user(self):
        """测试合法用户"""
        record = validate_draft_or_raise(UserDraft, {
            "name": "Grace",
            "email": "grace@example.com",
            "role": "Admin",
        })
        assert record.role is UserRole.ADMIN

    def test_invalid_email(self):
        """测试邮箱格式错误"""
        _, errors = validate_draft(UserDraft, {"name": "Grace", "email": "nope", "role": "User"})
        assert errors == {"email": "Enter a valid email address"}

    def test_email_text_trimmed(self):
        """测试邮箱两端空白被去除后再校验格式"""
        record, errors = validate_draft(UserDraft, {
            "name": "Grace",
            "email": "  grace@example.com ",
            "role": "User",
        })
        assert errors == {}
        assert record.email == "grace@example.com"


class TestResources:
    """测试资源定义"""

    def test_task_paths_and_titles(self):
        """测试任务路径与通知标题"""
        assert TASK_RESOURCE.detail_path("42") == "/tasks/42"
        assert TASK_RESOURCE.new_path == "/tasks/new"
        assert TASK_RESOURCE.saved_title == "Task saved"
        assert TASK_RESOURCE.save_failed_title == "Error saving task"
        assert TASK_RESOURCE.deleted_title == "Task deleted"
        assert TASK_RESOURCE.delete_failed_title == "Error deleting task"

    def test_status_options(self):
        """测试状态下拉选项"""
        spec = TASK_RESOURCE.field_spec("status")
        assert spec.options == (
            ("Todo", "Todo"),
            ("InProgress", "In Progress"),
            ("Done", "Done"),
        )

    def test_lookup(self):
        """测试按名称查找资源"""
        assert get_resource("user") is USER_RESOURCE
        with pytest.raises(KeyError):
            get_resource("invoice")


class TestFormatting:
    """测试标签与时间格式化"""

    @pytest.mark.parametrize("value,expected", [
        ("InProgress", "In Progress"),
        ("Todo", "Todo"),
        ("created_at", "Created At"),
        ("in-review", "In Review"),
        ("HTTPServer", "HTTP Server"),
        ("", ""),
    ])
    def test_generate_label(self, value, expected):
        """测试生成标签"""
        assert generate_label(value) == expected

    def test_format_date_time(self):
        """测试日期时间格式"""
        dt = datetime(2026, 10, 19, 9, 41, tzinfo=timezone.utc)
        assert format_date_time(dt) == "Oct 19, 2026, 9:41 AM"
        assert format_date_time(datetime(2026, 1, 2, 0, 5)) == "Jan 2, 2026, 12:05 AM"
        assert format_date_time(datetime(2026, 1, 2, 15, 0)) == "Jan 2, 2026, 3:00 PM"
        assert format_date_time(None) is None

    @pytest.mark.parametrize("delta,expected", [
        (timedelta(seconds=10), "just now"),
        (timedelta(seconds=50), "1 minute ago"),
        (timedelta(minutes=5), "5 minutes ago"),
        (timedelta(hours=1), "1 hour ago"),
        (timedelta(days=3), "3 days ago"),
        (timedelta(days=65), "2 months ago"),
        (timedelta(days=800), "2 years ago"),
        (timedelta(seconds=-30), "just now"),
    ])
    def test_times_ago(self, delta, expected):
        """测试相对时间"""
        now = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
        assert times_ago(now - delta, now=now) == expected

    def test_times_ago_none(self):
        """测试空时间"""
        assert times_ago(None) is None
