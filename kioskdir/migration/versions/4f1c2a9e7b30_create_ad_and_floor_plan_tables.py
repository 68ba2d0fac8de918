"""Create ad and floor_plan tables

Revision ID: 4f1c2a9e7b30
Revises:
Create Date: 2026-03-02 10:14:52.381204

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "4f1c2a9e7b30"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "ad",
        sa.Column("id", sa.UnicodeText, primary_key=True),
        sa.Column("name", sa.UnicodeText, nullable=False),
        sa.Column(
            "type", sa.UnicodeText, nullable=False,
            server_default="image"
        ),
        sa.Column("file_url", sa.UnicodeText, nullable=False),
        sa.Column(
            "is_active", sa.Boolean, nullable=False,
            server_default=sa.true()
        ),
        sa.Column("position", sa.Integer, nullable=False),
    )
    op.create_index("idx_ad_position", "ad", ["position"])

    op.create_table(
        "floor_plan",
        sa.Column("id", sa.UnicodeText, primary_key=True),
        sa.Column("name", sa.UnicodeText, nullable=False, unique=True),
        sa.Column("image_url", sa.UnicodeText, nullable=False),
        sa.Column("position", sa.Integer, nullable=False),
    )
    op.create_index("idx_floor_plan_position", "floor_plan", ["position"])


def downgrade():
    op.drop_index("idx_floor_plan_position", table_name="floor_plan")
    op.drop_table("floor_plan")
    op.drop_index("idx_ad_position", table_name="ad")
    op.drop_table("ad")
