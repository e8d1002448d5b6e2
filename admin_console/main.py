import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from .config import settings
from .api import session, tasks, users
from .api.deps import user_service

# 配置日志
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 启动时初始化
    logger.info("🚀 Admin Console 启动")
    admin = user_service.seed_admin(
        settings.seed_admin_id, settings.seed_admin_name, settings.seed_admin_email
    )
    logger.info(f"👤 初始管理员: {admin.id} <{admin.email}>")
    yield
    # 关闭时清理
    logger.info("👋 Admin Console 关闭")


app = FastAPI(
    title=settings.app_name,
    description="内部管理控制台：任务与用户的查看、创建、编辑、删除",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# CORS 配置
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 路由注册
app.include_router(tasks.router)
app.include_router(users.router)
app.include_router(session.router)


@app.get("/", summary="服务信息", tags=["系统"])
async def root():
    """获取 API 服务信息"""
    return {"message": "Admin Console API is running", "version": "0.1.0"}


@app.get("/health", summary="健康检查", tags=["系统"])
async def health():
    """检查服务健康状态"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "admin_console.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
    )
