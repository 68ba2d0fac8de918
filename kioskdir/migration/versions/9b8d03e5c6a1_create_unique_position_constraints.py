"""Create con_<table>_unique_position constraints
to make positions unique per collection.

The constraints are deferred, so range shifts may pass through transient
duplicates as long as the committed state has none. SQLite can't defer
unique constraints, there uniqueness is left to the positioning engine.

Revision ID: 9b8d03e5c6a1
Revises: 4f1c2a9e7b30
Create Date: 2026-03-09 16:41:07.902113

"""
from alembic import op


# revision identifiers, used by Alembic.
revision = "9b8d03e5c6a1"
down_revision = "4f1c2a9e7b30"
branch_labels = None
depends_on = None

_tables = ("ad", "floor_plan")


def upgrade():
    if op.get_bind().dialect.name != "postgresql":
        return

    for table in _tables:
        op.create_unique_constraint(
            constraint_name="con_{}_unique_position".format(table),
            table_name=table, columns=["position"],
            deferrable=True, initially="DEFERRED")


def downgrade():
    if op.get_bind().dialect.name != "postgresql":
        return

    for table in _tables:
        op.drop_constraint(
            constraint_name="con_{}_unique_position".format(table),
            table_name=table,
            type_="unique")
