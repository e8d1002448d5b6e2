from fastapi import APIRouter, Depends

from ..models.navigation import MAIN_NAV, SIDE_NAV, NavigationShell
from ..models.user import SessionInfo, User
from ..services.capabilities import capability_table
from .deps import get_current_user

router = APIRouter(prefix="/api", tags=["会话"])


@router.get(
    "/session",
    response_model=SessionInfo,
    summary="当前会话",
    description="返回当前用户以及对各资源的 create/update/delete 权限"
)
async def get_session(user: User = Depends(get_current_user)):
    return SessionInfo(user=user, capabilities=capability_table(user.role))


@router.get(
    "/navigation",
    response_model=NavigationShell,
    summary="应用导航",
    description="返回顶部导航、侧边栏与命令面板模块"
)
async def get_navigation(user: User = Depends(get_current_user)):
    return NavigationShell(
        main_nav=MAIN_NAV,
        side_nav=SIDE_NAV,
        command_modules={"task": True},
    )
