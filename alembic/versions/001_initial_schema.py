"""Initial schema — zones, riders, orders.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Zones
    op.create_table(
        "zones",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(200), unique=True, nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )

    # Riders
    op.create_table(
        "riders",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="offline"),
        sa.Column("zone_id", sa.String(36), sa.ForeignKey("zones.id"), nullable=True),
        sa.Column("active_orders", sa.Integer, nullable=False, server_default="0"),
    )
    op.create_index(
        "idx_riders_zone_status_load", "riders", ["zone_id", "status", "active_orders"]
    )

    # Orders (dispatch-relevant columns only)
    op.create_table(
        "orders",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("pickup_address", sa.Text, nullable=False),
        sa.Column("pickup_zone_id", sa.String(36), sa.ForeignKey("zones.id"), nullable=True),
        sa.Column(
            "assignment_status", sa.String(20), nullable=False, server_default="unassigned"
        ),
        sa.Column(
            "assigned_rider_id", sa.String(36), sa.ForeignKey("riders.id"), nullable=True
        ),
        sa.Column("assigned_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("assignment_timeout_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index(
        "idx_orders_assignment_timeout",
        "orders",
        ["assignment_status", "assignment_timeout_at"],
    )


def downgrade() -> None:
    op.drop_table("orders")
    op.drop_table("riders")
    op.drop_table("zones")
