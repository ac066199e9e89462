"""Initial schema: food items, receipts, recipes

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID, JSONB

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- food_items ---
    # receipt_ref is deliberately not a foreign key: deleting a receipt never touches items
    op.create_table(
        "food_items",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("owner_id", UUID(as_uuid=True), nullable=False, index=True),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("quantity", sa.Float, nullable=False, server_default="1"),
        sa.Column("unit", sa.String),
        sa.Column("category", sa.String, index=True),
        sa.Column("expiry_date", sa.Date, nullable=False, index=True),
        sa.Column("receipt_ref", UUID(as_uuid=True), index=True),
        sa.Column("consumed", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("quantity > 0", name="ck_food_items_quantity_positive"),
    )

    # --- receipts ---
    op.create_table(
        "receipts",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("owner_id", UUID(as_uuid=True), nullable=False, index=True),
        sa.Column("image_url", sa.String, nullable=False),
        sa.Column("store_name", sa.String),
        sa.Column("purchase_date", sa.Date),
        sa.Column("total_amount", sa.Float),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now(), index=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("total_amount IS NULL OR total_amount >= 0", name="ck_receipts_total_non_negative"),
    )

    # --- recipes ---
    op.create_table(
        "recipes",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("owner_id", UUID(as_uuid=True), nullable=False, index=True),
        sa.Column("recipe_name", sa.String, nullable=False),
        sa.Column("ingredients", JSONB, nullable=False, server_default="[]"),
        sa.Column("instructions", JSONB, nullable=False, server_default="[]"),
        sa.Column("source_item_ids", JSONB, nullable=False, server_default="[]"),
        sa.Column("image_ref", sa.String),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("recipes")
    op.drop_table("receipts")
    op.drop_table("food_items")
