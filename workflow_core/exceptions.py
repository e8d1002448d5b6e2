"""编辑工作流自定义异常"""

from typing import Dict, Optional


class WorkflowError(Exception):
    """工作流基础异常"""
    pass


class ValidationError(WorkflowError):
    """草稿校验错误（字段级，不会到达远端）"""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"草稿校验失败: {fields}")


class RemoteError(WorkflowError):
    """远端调用失败（约束冲突、服务端拒绝、网络故障）"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class NotFoundError(RemoteError):
    """实体在加载与修改之间已不存在"""

    def __init__(self, message: str = "实体不存在"):
        super().__init__(message, status_code=404)
