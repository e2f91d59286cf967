"""create_users_and_pets

Revision ID: 3c5e0a9d71b2
Revises:
Create Date: 2026-10-19 10:12:41.208733

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c5e0a9d71b2'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('hashed_password', sa.String(length=1024), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_superuser', sa.Boolean(), nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'pets',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=256), nullable=False),
        sa.Column('description', sa.String(length=1024), nullable=False),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('nft_id', sa.String(length=100), nullable=False),
        sa.Column('owner_name', sa.String(length=100), nullable=False),
        sa.Column('owner_id', sa.String(length=100), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('created', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_pets_user_id', 'pets', ['user_id'])
    op.create_index('ix_pets_nft_id', 'pets', ['nft_id'])
    op.create_index('ix_pets_status', 'pets', ['status'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_pets_status', table_name='pets')
    op.drop_index('ix_pets_nft_id', table_name='pets')
    op.drop_index('ix_pets_user_id', table_name='pets')
    op.drop_table('pets')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
