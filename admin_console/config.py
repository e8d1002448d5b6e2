"""控制台后端配置"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用配置（环境变量前缀 CONSOLE_，支持 .env 文件）"""
    model_config = SettingsConfigDict(
        env_prefix="CONSOLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="Admin Console API", description="服务名称")
    host: str = Field(default="127.0.0.1", description="监听地址")
    port: int = Field(default=8000, description="监听端口")
    workers: int = Field(default=1, description="uvicorn worker 数量（内存存储不跨 worker 共享）")
    log_level: str = Field(default="INFO", description="日志级别")

    cors_origins: List[str] = Field(default_factory=lambda: ["*"], description="允许的跨域来源")

    seed_admin_id: str = Field(default="admin", description="启动时创建的管理员ID")
    seed_admin_name: str = Field(default="Admin", description="启动时创建的管理员名称")
    seed_admin_email: str = Field(default="admin@example.com", description="启动时创建的管理员邮箱")


settings = Settings()
