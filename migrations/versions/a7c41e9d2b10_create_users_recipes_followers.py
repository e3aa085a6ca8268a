"""create users, recipes and followers tables

Revision ID: a7c41e9d2b10
Revises:
Create Date: 2026-10-19 09:12:44.120331

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "a7c41e9d2b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, recipes and followers tables."""
    # Check if tables already exist (idempotent)
    conn = op.get_bind()
    inspector = sa.inspect(conn)
    existing_tables = set(inspector.get_table_names())

    if "users" not in existing_tables:
        op.create_table(
            "users",
            sa.Column("id", sa.String(64), primary_key=True),
            sa.Column("email", sa.String(320), nullable=False, unique=True),
            sa.Column("name", sa.String(255), nullable=False),
            sa.Column("password_hash", sa.String(255), nullable=False),
            sa.Column("role", sa.String(16), nullable=False, server_default="NORMAL"),
            sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        )

    if "recipes" not in existing_tables:
        op.create_table(
            "recipes",
            sa.Column("id", sa.String(64), primary_key=True),
            sa.Column("title", sa.String(255), nullable=False),
            sa.Column("description", sa.Text(), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
            sa.Column("user_id", sa.String(64), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        )
        op.create_index("idx_recipes_user_id", "recipes", ["user_id"])
        op.create_index("idx_recipes_created_at", "recipes", ["created_at"])

    # No unique constraint on (user_id, followed_user_id): duplicate edges are accepted.
    if "followers" not in existing_tables:
        op.create_table(
            "followers",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("user_id", sa.String(64), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
            sa.Column("followed_user_id", sa.String(64), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        )
        op.create_index("idx_followers_user_id", "followers", ["user_id"])
        op.create_index("idx_followers_followed_user_id", "followers", ["followed_user_id"])


def downgrade() -> None:
    op.drop_index("idx_followers_followed_user_id", table_name="followers")
    op.drop_index("idx_followers_user_id", table_name="followers")
    op.drop_table("followers")
    op.drop_index("idx_recipes_created_at", table_name="recipes")
    op.drop_index("idx_recipes_user_id", table_name="recipes")
    op.drop_table("recipes")
    op.drop_table("users")
