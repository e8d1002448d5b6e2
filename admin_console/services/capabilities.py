"""角色 -> 资源权限表（策略在核心之外求值，只把三个开关交给工作流）"""

from typing import Dict

from workflow_core.controller import Capabilities
from workflow_core.resources import list_resources
from workflow_core.schema import UserRole

ROLE_CAPABILITIES: Dict[UserRole, Dict[str, Capabilities]] = {
    UserRole.ADMIN: {
        "task": Capabilities.all(),
        "user": Capabilities.all(),
    },
    UserRole.USER: {
        "task": Capabilities(can_create=True, can_update=True, can_delete=False),
        "user": Capabilities.none(),
    },
}


def capabilities_for(role: UserRole, resource: str) -> Capabilities:
    """返回角色对资源的权限，未配置时全部为 False"""
    return ROLE_CAPABILITIES.get(role, {}).get(resource, Capabilities.none())


def capability_table(role: UserRole) -> Dict[str, Dict[str, bool]]:
    """会话接口使用的序列化权限表"""
    table = {}
    for resource in list_resources():
        flags = capabilities_for(role, resource.name)
        table[resource.name] = {
            "can_create": flags.can_create,
            "can_update": flags.can_update,
            "can_delete": flags.can_delete,
        }
    return table
