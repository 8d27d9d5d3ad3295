"""add warehouse record tables

Revision ID: 0001
Revises:
Create Date: 2026-10-17 00:00:00.000000

"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "product",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("sku", sa.String(length=100), nullable=False, unique=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("pairs_per_box", sa.Integer(), nullable=False),
        sa.Column("sizes", sa.String(length=255), nullable=False),
        sa.Column("colors", sa.String(length=255), nullable=False),
    )

    op.create_table(
        "delivery",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("sku", sa.String(length=100), nullable=False),
        sa.Column("box_count", sa.Integer(), nullable=False),
        sa.Column("pairs_per_box", sa.Integer(), nullable=False),
        sa.Column("total_pairs", sa.Integer(), nullable=False),
        sa.Column("product_name", sa.String(length=255), nullable=True),
        sa.Column("account", sa.String(length=255), nullable=True),
    )
    op.create_index("ix_delivery_sku", "delivery", ["sku"])

    op.create_table(
        "stock_unit",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("sku", sa.String(length=100), nullable=False),
        sa.Column("size", sa.String(length=50), nullable=False),
        sa.Column("color", sa.String(length=100), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("box_id", sa.String(length=100), nullable=True),
    )
    op.create_index("ix_stock_unit_sku", "stock_unit", ["sku"])

    op.create_table(
        "outgoing_document",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("document_number", sa.String(length=100), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.String(length=20), nullable=True),
        sa.Column("recipient_id", sa.String(length=100), nullable=True),
        sa.Column("recipient", sa.String(length=255), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False),
        sa.Column("total_items", sa.Integer(), nullable=False),
    )

    op.create_table(
        "outgoing_document_item",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("document_id", sa.Integer(), sa.ForeignKey("outgoing_document.id"), nullable=False),
        sa.Column("sku", sa.String(length=100), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("color", sa.String(length=100), nullable=False),
        sa.Column("size", sa.String(length=50), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
    )

    op.create_table(
        "box_stock",
        sa.Column("id", sa.String(length=120), primary_key=True),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("sku", sa.String(length=100), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("box_count", sa.Integer(), nullable=False),
        sa.Column("pairs_per_box", sa.Integer(), nullable=False),
        sa.Column("total_pairs", sa.Integer(), nullable=False),
        sa.Column("stock_level", sa.String(length=20), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("box_stock")
    op.drop_table("outgoing_document_item")
    op.drop_table("outgoing_document")
    op.drop_index("ix_stock_unit_sku", table_name="stock_unit")
    op.drop_table("stock_unit")
    op.drop_index("ix_delivery_sku", table_name="delivery")
    op.drop_table("delivery")
    op.drop_table("product")
