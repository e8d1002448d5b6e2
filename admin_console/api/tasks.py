from typing import List

from fastapi import APIRouter, Depends, HTTPException

from workflow_core.exceptions import NotFoundError
from workflow_core.schema import TaskDraft
from ..models.common import CreateResponse
from ..models.task import Task
from ..models.user import User
from .deps import ensure_capability, get_current_user, task_service

router = APIRouter(prefix="/api/tasks", tags=["任务管理"])


@router.get(
    "",
    response_model=List[Task],
    summary="列出任务",
    description="获取全部任务，按最后修改时间倒序"
)
async def list_tasks(user: User = Depends(get_current_user)):
    return await task_service.list_tasks()


@router.get(
    "/{task_id}",
    response_model=Task,
    summary="获取任务",
    description="根据任务 ID 获取任务及其创建/修改信息"
)
async def get_task(task_id: str, user: User = Depends(get_current_user)):
    """
    获取任务详情

    - **task_id**: 任务唯一标识符
    """
    try:
        return await task_service.get_task(task_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="任务不存在")


@router.post(
    "",
    response_model=CreateResponse,
    status_code=201,
    summary="创建任务",
    description="创建任务并返回服务端分配的 ID"
)
async def create_task(draft: TaskDraft, user: User = Depends(get_current_user)):
    """
    创建任务

    - **title**: 任务标题（不能为空）
    - **status**: Todo / InProgress / Done
    - **description**: 描述（可选）
    """
    ensure_capability(user, "task", "create")
    task = await task_service.create_task(draft, user)
    return CreateResponse(id=task.id, message="任务已创建")


@router.put(
    "/{task_id}",
    response_model=Task,
    summary="更新任务",
    description="覆盖任务的可编辑字段，修改人/修改时间由服务端写入"
)
async def update_task(task_id: str, draft: TaskDraft, user: User = Depends(get_current_user)):
    ensure_capability(user, "task", "update")
    try:
        return await task_service.update_task(task_id, draft, user)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="任务不存在")


@router.delete(
    "/{task_id}",
    summary="删除任务",
    description="永久删除任务，不可恢复"
)
async def delete_task(task_id: str, user: User = Depends(get_current_user)):
    ensure_capability(user, "task", "delete")
    try:
        await task_service.delete_task(task_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="任务不存在")

    return {"message": "任务已删除"}
