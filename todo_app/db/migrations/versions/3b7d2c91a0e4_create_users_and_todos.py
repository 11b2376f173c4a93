"""create_users_and_todos

Revision ID: 3b7d2c91a0e4
Revises:
Create Date: 2026-10-19 10:12:33.418520
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from todo_app.config import get_settings


# revision identifiers, used by Alembic.
revision: str = '3b7d2c91a0e4'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_schema = get_settings().DB_SCHEMA or None
_users_fk = f"{_schema}.users.id" if _schema else "users.id"


def upgrade() -> None:
    # 1. users
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('username', sa.String(length=64), nullable=False, comment='登录名'),
        sa.Column('name', sa.String(length=128), nullable=True, comment='显示名称'),
        sa.Column('hashed_pwd', sa.String(length=256), nullable=False, comment='密码哈希'),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False, comment='是否激活'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False, comment='创建时间'),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False, comment='更新时间'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
        schema=_schema,
    )

    # 2. todos：created_by_id 建索引，列表按 created_at 排序
    op.create_table(
        'todos',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.Text(), nullable=False, comment='任务描述'),
        sa.Column('is_completed', sa.Boolean(), server_default=sa.false(), nullable=False, comment='是否完成'),
        sa.Column('category_id', sa.Text(), nullable=True, comment='分类 ID'),
        sa.Column('created_by_id', sa.String(length=36), nullable=False, comment='创建者用户 ID'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False, comment='创建时间（列表排序键）'),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False, comment='更新时间'),
        sa.ForeignKeyConstraint(['created_by_id'], [_users_fk], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        schema=_schema,
    )
    op.create_index('ix_todos_created_by_id', 'todos', ['created_by_id'], schema=_schema)
    op.create_index('ix_todos_created_at', 'todos', ['created_at'], schema=_schema)


def downgrade() -> None:
    op.drop_index('ix_todos_created_at', table_name='todos', schema=_schema)
    op.drop_index('ix_todos_created_by_id', table_name='todos', schema=_schema)
    op.drop_table('todos', schema=_schema)
    op.drop_table('users', schema=_schema)
