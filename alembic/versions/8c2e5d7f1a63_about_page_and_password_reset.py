"""about_page_and_password_reset

Revision ID: 8c2e5d7f1a63
Revises: 3f0c1a9b2d41
Create Date: 2026-10-18 16:40:02.551390

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '8c2e5d7f1a63'
down_revision = '3f0c1a9b2d41'
branch_labels = None
depends_on = None

NOW = sa.text('(CURRENT_TIMESTAMP)')


def _pair(name, type_):
    return [
        sa.Column(name, type_, nullable=False),
        sa.Column(f'{name}_fa', type_, nullable=False),
    ]


def upgrade() -> None:
    with op.batch_alter_table('users') as batch_op:
        batch_op.add_column(sa.Column('reset_token', sa.String(length=128), nullable=True))
        batch_op.add_column(sa.Column('reset_token_expiry', sa.DateTime(), nullable=True))
        batch_op.create_index('ix_users_reset_token', ['reset_token'], unique=True)

    op.create_table('about_pages',
        sa.Column('id', sa.Integer(), nullable=False),
        *_pair('title', sa.String(length=255)),
        *_pair('story_title', sa.String(length=255)),
        *_pair('story_content', sa.Text()),
        sa.Column('story_image', sa.String(length=500), nullable=True),
        *_pair('mission_title', sa.String(length=255)),
        *_pair('mission_content', sa.Text()),
        *_pair('values_title', sa.String(length=255)),
        *_pair('value1_title', sa.String(length=255)),
        *_pair('value1_content', sa.Text()),
        *_pair('value2_title', sa.String(length=255)),
        *_pair('value2_content', sa.Text()),
        *_pair('value3_title', sa.String(length=255)),
        *_pair('value3_content', sa.Text()),
        sa.Column('admin_id', sa.Integer(), sa.ForeignKey('admins.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=NOW, nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=NOW, nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_about_pages_id', 'about_pages', ['id'])


def downgrade() -> None:
    op.drop_table('about_pages')
    with op.batch_alter_table('users') as batch_op:
        batch_op.drop_index('ix_users_reset_token')
        batch_op.drop_column('reset_token_expiry')
        batch_op.drop_column('reset_token')
