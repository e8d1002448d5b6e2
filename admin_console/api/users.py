from typing import List

from fastapi import APIRouter, Depends, HTTPException

from workflow_core.exceptions import NotFoundError
from workflow_core.schema import UserDraft
from ..models.common import CreateResponse
from ..models.user import User
from .deps import ensure_capability, get_current_user, user_service

router = APIRouter(prefix="/api/users", tags=["用户管理"])


@router.get("", response_model=List[User], summary="列出用户")
async def list_users(user: User = Depends(get_current_user)):
    return await user_service.list_users()


@router.get("/{user_id}", response_model=User, summary="获取用户")
async def get_user(user_id: str, user: User = Depends(get_current_user)):
    try:
        return await user_service.get_user(user_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="用户不存在")


@router.post("", response_model=CreateResponse, status_code=201, summary="创建用户")
async def create_user(draft: UserDraft, user: User = Depends(get_current_user)):
    """
    创建用户

    - **name**: 名称（不能为空）
    - **email**: 邮箱（唯一）
    - **role**: Admin / User
    - **image**: 头像地址（可选）
    """
    ensure_capability(user, "user", "create")
    try:
        created = await user_service.create_user(draft, user)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return CreateResponse(id=created.id, message="用户已创建")


@router.put("/{user_id}", response_model=User, summary="更新用户")
async def update_user(user_id: str, draft: UserDraft, user: User = Depends(get_current_user)):
    ensure_capability(user, "user", "update")
    try:
        return await user_service.update_user(user_id, draft, user)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="用户不存在")
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/{user_id}", summary="删除用户")
async def delete_user(user_id: str, user: User = Depends(get_current_user)):
    ensure_capability(user, "user", "delete")
    try:
        await user_service.delete_user(user_id, user)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="用户不存在")
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return {"message": "用户已删除"}
