"""通知与导航出口"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Protocol

from pydantic import BaseModel, Field


class NotificationKind(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class Notification(BaseModel):
    """一次离散的通知事件（对应前端 toast）"""
    kind: NotificationKind
    title: str
    description: Optional[str] = Field(None, description="补充说明（失败原因等）")


class NavigationKind(str, Enum):
    DETAIL = "detail"
    LIST = "list"
    BACK = "back"
    NEW = "new"


class NavigationIntent(BaseModel):
    """导航意图，由宿主路由执行"""
    kind: NavigationKind
    path: Optional[str] = Field(None, description="目标路径，BACK 时为空")
    replace: bool = Field(default=False, description="是否替换当前历史记录")


class NotificationSink(Protocol):
    def notify(self, notification: Notification) -> None:
        ...


class NavigationSink(Protocol):
    def navigate(self, intent: NavigationIntent) -> None:
        ...


class CollectingNotifier:
    """收集通知的内存出口"""

    def __init__(self):
        self.notifications: List[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    def clear(self) -> None:
        self.notifications.clear()


class CollectingNavigator:
    """收集导航意图的内存出口"""

    def __init__(self):
        self.intents: List[NavigationIntent] = []

    def navigate(self, intent: NavigationIntent) -> None:
        self.intents.append(intent)

    @property
    def last(self) -> Optional[NavigationIntent]:
        return self.intents[-1] if self.intents else None

    def clear(self) -> None:
        self.intents.clear()
