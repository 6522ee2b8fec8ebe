"""user profile fields

Revision ID: 8f2a61c5d0e7
Revises: 3c1d7e9a4b20
Create Date: 2026-10-19 15:40:02.117634

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "8f2a61c5d0e7"
down_revision: Union[str, None] = "3c1d7e9a4b20"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column("users", sa.Column("birth_date", sa.Date(), nullable=True))
    op.add_column("users", sa.Column("bio", sa.String(length=500), nullable=True))
    op.add_column("users", sa.Column("phone_number", sa.String(length=32), nullable=True))
    op.add_column("users", sa.Column("profile_picture", sa.String(length=512), nullable=True))


def downgrade() -> None:
    op.drop_column("users", "profile_picture")
    op.drop_column("users", "phone_number")
    op.drop_column("users", "bio")
    op.drop_column("users", "birth_date")
