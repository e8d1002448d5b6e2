#!/usr/bin/env python3
"""
启动控制台后端
注意：内存存储在各 worker 之间不共享，默认单 worker
"""
import sys
import os

# 添加项目根目录到路径
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))


def banner_mode(workers: int) -> str:
    """按 worker 数量返回启动模式描述"""
    if workers > 1:
        return f"多 Worker 模式, {workers} 个进程"
    return "单 Worker 模式"


if __name__ == "__main__":
    import uvicorn
    from admin_console.config import settings

    print("=" * 50)
    print(f"🚀 启动 Admin Console 后端 ({banner_mode(settings.workers)})")
    print("=" * 50)
    print(f"Host: {settings.host}")
    print(f"Port: {settings.port}")
    print(f"Workers: {settings.workers}")
    if settings.workers > 1:
        print("注意: 多 worker 模式不支持代码热重载, 各进程的内存数据互不可见")
    print("=" * 50)

    uvicorn.run(
        "admin_console.main:app",
        host=settings.host,
        port=settings.port,
        workers=settings.workers,
        log_level=settings.log_level.lower()
    )
