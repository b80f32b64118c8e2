"""subscribers and jobs

Revision ID: 1c9e4b7a2d10
Revises:
Create Date: 2025-01-06 10:12:40.118203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '1c9e4b7a2d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create subscribers and jobs tables."""

    op.create_table(
        'subscribers',
        sa.Column('id', sa.Uuid(), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('user_name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('job_titles', postgresql.ARRAY(sa.Text()), nullable=True),
        sa.Column('preferred_countries', postgresql.ARRAY(sa.Text()), nullable=True),
        sa.Column('salary_min', sa.BigInteger(), server_default='0', nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_subscribers_email', 'subscribers', ['email'], unique=True)

    op.create_table(
        'jobs',
        sa.Column('id', sa.Uuid(), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('country', sa.Text(), nullable=False),
        sa.Column('salary_min', sa.BigInteger(), server_default='0', nullable=False),
        sa.Column('posted_date', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    # Search filters by exact title and country
    op.create_index('ix_jobs_title_country', 'jobs', ['title', 'country'])


def downgrade() -> None:
    """Drop subscribers and jobs tables."""
    op.drop_index('ix_jobs_title_country', table_name='jobs')
    op.drop_table('jobs')
    op.drop_index('ix_subscribers_email', table_name='subscribers')
    op.drop_table('subscribers')
