"""
Alembic 迁移环境配置
- 使用 async engine
- 配置了 DB_SCHEMA 时自动创建 schema
- 自动发现所有模型
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool, text
from sqlalchemy.ext.asyncio import async_engine_from_config

from todo_app.config import get_settings
from todo_app.db.models import Base  # noqa: F401 - 触发所有模型注册

settings = get_settings()
config = context.config

# 日志配置
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# 直接使用异步驱动 URL（asyncpg / aiosqlite），在 run_async_migrations 中处理
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

target_metadata = Base.metadata

# 只管理自己的 schema，忽略其他 schema 中的表
MANAGED_SCHEMA = settings.DB_SCHEMA or None


def include_name(name, type_, parent_names) -> bool:
    """过滤器：只关注我们自己的 schema，忽略 public / 其他项目的表"""
    if type_ == "schema" and MANAGED_SCHEMA:
        return name == MANAGED_SCHEMA
    return True


def run_migrations_offline() -> None:
    """离线模式：生成 SQL 脚本"""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        version_table_schema=MANAGED_SCHEMA,
        include_schemas=bool(MANAGED_SCHEMA),
        include_name=include_name,
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection) -> None:
    """执行迁移"""
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        version_table_schema=MANAGED_SCHEMA,
        include_schemas=bool(MANAGED_SCHEMA),
        include_name=include_name,
        render_as_batch=settings.is_sqlite,  # SQLite 不支持大部分 ALTER
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """异步模式：在线迁移"""
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        # 先创建 schema（如果不存在）
        if MANAGED_SCHEMA and not settings.is_sqlite:
            await connection.execute(text(f"CREATE SCHEMA IF NOT EXISTS {MANAGED_SCHEMA}"))
            await connection.commit()

        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    """在线模式入口"""
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
