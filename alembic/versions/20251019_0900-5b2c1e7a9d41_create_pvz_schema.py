"""create_pvz_schema

Revision ID: 5b2c1e7a9d41
Revises:
Create Date: 2025-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '5b2c1e7a9d41'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False, comment='邮箱'),
        sa.Column('hashed_password', sa.String(length=255), nullable=False, comment='密码哈希'),
        sa.Column('role_id', sa.SmallInteger(), nullable=False, server_default='1', comment='角色：1=client，2=moderator'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False, comment='创建时间'),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'pvzs',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('record_number', sa.BigInteger(), sa.Identity(always=False), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, comment='注册时间'),
        sa.Column('city_id', sa.SmallInteger(), nullable=False, comment='城市：1=Казань，2=Москва，3=Санкт-Петербург'),
        sa.PrimaryKeyConstraint('id', name='pk_pvzs'),
        sa.UniqueConstraint('record_number', name='uq_pvzs_record_number'),
    )

    op.create_table(
        'receptions',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('pvz_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.SmallInteger(), nullable=False, server_default='1', comment='1=in_progress, 2=closed'),
        sa.ForeignKeyConstraint(['pvz_id'], ['pvzs.id'], ondelete='CASCADE', name='fk_receptions_pvz_id_pvzs'),
        sa.PrimaryKeyConstraint('id', name='pk_receptions'),
    )
    op.create_index('ix_receptions_pvz_created', 'receptions', ['pvz_id', 'created_at'], unique=False)
    # 每个 PVZ 最多一个进行中的受理
    op.create_index(
        'uq_receptions_pvz_in_progress',
        'receptions',
        ['pvz_id'],
        unique=True,
        postgresql_where=sa.text('status = 1'),
    )

    op.create_table(
        'products',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('reception_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('category_id', sa.SmallInteger(), nullable=False, comment='1=электроника, 2=одежда, 3=обувь'),
        sa.ForeignKeyConstraint(['reception_id'], ['receptions.id'], ondelete='CASCADE', name='fk_products_reception_id_receptions'),
        sa.PrimaryKeyConstraint('id', name='pk_products'),
    )
    op.create_index('ix_products_reception_created', 'products', ['reception_id', 'created_at'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_products_reception_created', table_name='products')
    op.drop_table('products')
    op.drop_index('uq_receptions_pvz_in_progress', table_name='receptions')
    op.drop_index('ix_receptions_pvz_created', table_name='receptions')
    op.drop_table('receptions')
    op.drop_table('pvzs')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
