"""内存存储（进程内，多 worker 之间不共享）"""

import threading
from typing import Dict, Generic, List, Optional, TypeVar

from ..models.task import Task
from ..models.user import User

T = TypeVar("T", Task, User)


class MemoryStore(Generic[T]):
    def __init__(self):
        self._store: Dict[str, T] = {}
        self._lock = threading.Lock()

    def save(self, item: T) -> None:
        with self._lock:
            self._store[item.id] = item

    def get(self, item_id: str) -> Optional[T]:
        return self._store.get(item_id)

    def list_all(self) -> List[T]:
        return list(self._store.values())

    def delete(self, item_id: str) -> bool:
        with self._lock:
            if item_id in self._store:
                del self._store[item_id]
                return True
            return False

    def clear(self) -> None:
        with self._lock:
            self._store.clear()


class TaskStore(MemoryStore[Task]):
    pass


class UserStore(MemoryStore[User]):
    def find_by_email(self, email: str) -> Optional[User]:
        email = email.lower()
        for user in self._store.values():
            if user.email.lower() == email:
                return user
        return None
