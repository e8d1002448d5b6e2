from .capabilities import capabilities_for, capability_table
from .task_service import TaskService
from .user_service import UserService

__all__ = ["TaskService", "UserService", "capabilities_for", "capability_table"]
