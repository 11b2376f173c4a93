"""
数据库引擎：AsyncEngine 创建 + AsyncSession 工厂
"""

from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from todo_app.config import get_settings

settings = get_settings()


def _engine_options() -> dict:
    """PG 走连接池 + search_path；SQLite 只保留 echo"""
    if settings.is_sqlite:
        return {"echo": settings.DB_ECHO}
    options = {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_recycle": settings.DB_POOL_RECYCLE,
        "echo": settings.DB_ECHO,
    }
    if settings.DB_SCHEMA:
        options["connect_args"] = {"server_settings": {"search_path": settings.DB_SCHEMA}}
    return options


engine = create_async_engine(settings.DATABASE_URL, **_engine_options())

async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI 依赖注入：获取数据库会话"""
    async with async_session() as session:
        yield session
