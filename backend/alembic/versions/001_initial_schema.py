"""Initial schema — catalog, commerce and notification tables.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _record_columns() -> list[sa.Column]:
    return [
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "categories",
        *_record_columns(),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("image", sa.String(1000), nullable=False, server_default="no_url"),
    )

    op.create_table(
        "sub_categories",
        *_record_columns(),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("category_id", UUID(as_uuid=True), nullable=False),
    )
    op.create_index("ix_sub_categories_category_id", "sub_categories", ["category_id"])

    op.create_table(
        "brands",
        *_record_columns(),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("sub_category_id", UUID(as_uuid=True), nullable=False),
    )
    op.create_index("ix_brands_sub_category_id", "brands", ["sub_category_id"])

    op.create_table(
        "variant_types",
        *_record_columns(),
        sa.Column("name", sa.String(200), nullable=False, unique=True),
        sa.Column("type", sa.String(200), nullable=True),
    )

    op.create_table(
        "variants",
        *_record_columns(),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("variant_type_id", UUID(as_uuid=True), nullable=False),
        sa.UniqueConstraint("variant_type_id", "name", name="uq_variant_type_name"),
    )
    op.create_index("ix_variants_variant_type_id", "variants", ["variant_type_id"])

    op.create_table(
        "products",
        *_record_columns(),
        sa.Column("name", sa.String(300), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("quantity", sa.Integer, nullable=False),
        sa.Column("price", sa.Float, nullable=False),
        sa.Column("offer_price", sa.Float, nullable=True),
        sa.Column("category_id", UUID(as_uuid=True), nullable=False),
        sa.Column("sub_category_id", UUID(as_uuid=True), nullable=False),
        sa.Column("brand_id", UUID(as_uuid=True), nullable=True),
        sa.Column("variant_type_id", UUID(as_uuid=True), nullable=True),
        sa.Column("images", sa.JSON, nullable=False),
    )
    for column in ("category_id", "sub_category_id", "brand_id", "variant_type_id"):
        op.create_index(f"ix_products_{column}", "products", [column])

    op.create_table(
        "product_variants",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "product_id", UUID(as_uuid=True),
            sa.ForeignKey("products.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("variant_id", UUID(as_uuid=True), nullable=False),
    )
    op.create_index("ix_product_variants_product_id", "product_variants", ["product_id"])
    op.create_index("ix_product_variants_variant_id", "product_variants", ["variant_id"])

    op.create_table(
        "coupons",
        *_record_columns(),
        sa.Column("coupon_code", sa.String(100), nullable=False, unique=True),
        sa.Column("discount_type", sa.String(20), nullable=False),
        sa.Column("discount_amount", sa.Float, nullable=False),
        sa.Column("minimum_purchase_amount", sa.Float, nullable=True),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("applicable_category_id", UUID(as_uuid=True), nullable=True),
        sa.Column("applicable_sub_category_id", UUID(as_uuid=True), nullable=True),
        sa.Column("applicable_product_id", UUID(as_uuid=True), nullable=True),
    )

    op.create_table(
        "posters",
        *_record_columns(),
        sa.Column("poster_name", sa.String(200), nullable=False),
        sa.Column("image_url", sa.String(1000), nullable=False, server_default="no_url"),
    )

    op.create_table(
        "orders",
        *_record_columns(),
        sa.Column("user_id", sa.String(100), nullable=False),
        sa.Column("order_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("order_status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("items", sa.JSON, nullable=False),
        sa.Column("total_price", sa.Float, nullable=False),
        sa.Column("shipping_address", sa.JSON, nullable=False),
        sa.Column("payment_method", sa.String(20), nullable=False),
        sa.Column("coupon_id", UUID(as_uuid=True), nullable=True),
        sa.Column("order_total", sa.JSON, nullable=False),
        sa.Column("tracking_url", sa.String(1000), nullable=True),
    )
    op.create_index("ix_orders_user_id", "orders", ["user_id"])

    op.create_table(
        "notifications",
        *_record_columns(),
        sa.Column("notification_id", sa.String(100), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("image_url", sa.String(1000), nullable=True),
    )
    op.create_index("ix_notifications_notification_id", "notifications", ["notification_id"])


def downgrade() -> None:
    for table in (
        "notifications", "orders", "posters", "coupons", "product_variants",
        "products", "variants", "variant_types", "brands", "sub_categories",
        "categories",
    ):
        op.drop_table(table)
