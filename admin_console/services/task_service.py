import logging
from typing import List

from workflow_core.exceptions import NotFoundError
from workflow_core.schema import TaskDraft
from ..models.common import utcnow
from ..models.task import Task
from ..models.user import User
from ..storage.memory_store import TaskStore

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(self, store: TaskStore):
        self.store = store

    async def create_task(self, draft: TaskDraft, actor: User) -> Task:
        """创建任务，创建人/修改人由服务端写入"""
        task = Task(
            title=draft.title,
            status=draft.status,
            description=draft.description,
            created_by=actor.ref(),
            updated_by=actor.ref(),
        )
        self.store.save(task)
        logger.info(f"任务已创建: {task.id}, 创建人: {actor.id}")
        return task

    async def get_task(self, task_id: str) -> Task:
        task = self.store.get(task_id)
        if not task:
            raise NotFoundError(f"任务不存在: {task_id}")
        return task

    async def list_tasks(self) -> List[Task]:
        """列出任务，最近修改的在前"""
        return sorted(self.store.list_all(), key=lambda t: t.updated_at, reverse=True)

    async def update_task(self, task_id: str, draft: TaskDraft, actor: User) -> Task:
        """
        更新任务（后写覆盖，不做版本检查）

        Raises:
            NotFoundError: 任务不存在
        """
        task = await self.get_task(task_id)
        updated = task.model_copy(update={
            "title": draft.title,
            "status": draft.status,
            "description": draft.description,
            "updated_at": utcnow(),
            "updated_by": actor.ref(),
        })
        self.store.save(updated)
        logger.info(f"任务已更新: {task_id}, 修改人: {actor.id}")
        return updated

    async def delete_task(self, task_id: str) -> None:
        if not self.store.delete(task_id):
            raise NotFoundError(f"任务不存在: {task_id}")
        logger.info(f"任务已删除: {task_id}")
