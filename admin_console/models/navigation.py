from pydantic import BaseModel, Field
from typing import Dict, List, Optional


class NavItem(BaseModel):
    """导航项"""
    title: str = Field(..., description="显示名称")
    href: str = Field(..., description="目标路径")
    icon: Optional[str] = Field(None, description="图标名称（侧边栏使用）")


class NavigationShell(BaseModel):
    """应用外壳导航"""
    logo_link: str = Field(default="/dashboard", description="Logo 链接")
    main_nav: List[NavItem]
    side_nav: List[NavItem]
    command_modules: Dict[str, bool] = Field(default_factory=dict, description="命令面板可搜索的模块")


MAIN_NAV = [
    NavItem(title="Dashboard", href="/dashboard"),
    NavItem(title="Users", href="/users"),
    NavItem(title="Tasks", href="/tasks"),
]

SIDE_NAV = [
    NavItem(title="Dashboard", href="/dashboard", icon="dashboard"),
    NavItem(title="Users", href="/users", icon="user"),
    NavItem(title="Tasks", href="/tasks", icon="task"),
    NavItem(title="Settings", href="/settings", icon="settings"),
]
