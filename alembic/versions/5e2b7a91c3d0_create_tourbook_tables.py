"""create_tourbook_tables

Revision ID: 5e2b7a91c3d0
Revises:
Create Date: 2026-10-17

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "5e2b7a91c3d0"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


ADMIN_USERS_SUMMARY_SQL = """
create or replace function public.admin_users_summary()
returns table (total_users bigint, today_new_users bigint, marketing_opt_in_users bigint)
language sql
stable
security definer
as $$
    select
        count(*) as total_users,
        count(*) filter (
            where (created_at at time zone 'Asia/Seoul')::date = (now() at time zone 'Asia/Seoul')::date
        ) as today_new_users,
        count(*) filter (where marketing_opt_in) as marketing_opt_in_users
    from public.profiles
$$;
"""


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def _uuid_pk() -> sa.Column:
    return sa.Column("id", sa.UUID(), server_default=sa.text("gen_random_uuid()"), nullable=False)


def _jsonb_list(name: str) -> sa.Column:
    return sa.Column(name, postgresql.JSONB(astext_type=sa.Text()), server_default=sa.text("'[]'::jsonb"), nullable=False)


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("phone", sa.Text(), nullable=True),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.Column("country_code", sa.Text(), nullable=True),
        sa.Column("preferred_lang", sa.Text(), nullable=True),
        sa.Column("marketing_opt_in", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("marketing_opt_in_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("user_id"),
    )
    op.create_table(
        "admin_users",
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("user_id"),
    )
    op.create_table(
        "product_themes",
        _uuid_pk(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("slug", sa.Text(), nullable=False),
        sa.Column("sort_order", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
    )
    op.create_table(
        "product_areas",
        _uuid_pk(),
        sa.Column("theme_id", sa.UUID(), nullable=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("slug", sa.Text(), nullable=False),
        sa.Column("sort_order", sa.Integer(), server_default=sa.text("0"), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["theme_id"], ["product_themes.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_product_areas_theme_id", "product_areas", ["theme_id"], unique=False)
    op.create_table(
        "products",
        _uuid_pk(),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("subtitle", sa.Text(), server_default=sa.text("''"), nullable=False),
        sa.Column("region", sa.Text(), nullable=True),
        sa.Column("nights", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("days", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("status", sa.Text(), server_default=sa.text("'DRAFT'"), nullable=False),
        sa.Column("price_text", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), server_default=sa.text("''"), nullable=False),
        sa.Column("thumbnail_url", sa.Text(), server_default=sa.text("''"), nullable=False),
        sa.Column("thumbnail_path", sa.Text(), server_default=sa.text("''"), nullable=False),
        _jsonb_list("images"),
        _jsonb_list("included"),
        _jsonb_list("excluded"),
        _jsonb_list("notices"),
        _jsonb_list("itinerary"),
        _jsonb_list("departures"),
        sa.Column("theme_id", sa.UUID(), nullable=True),
        sa.Column("area_id", sa.UUID(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["theme_id"], ["product_themes.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["area_id"], ["product_areas.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_products_updated_at", "products", ["updated_at"], unique=False)
    op.create_table(
        "bookings",
        _uuid_pk(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("product_id", sa.UUID(), nullable=False),
        sa.Column("status", sa.Text(), server_default=sa.text("'REQUESTED'"), nullable=False),
        sa.Column("travel_date", sa.Date(), nullable=True),
        sa.Column("people_count", sa.Integer(), server_default=sa.text("1"), nullable=False),
        sa.Column("contact_name", sa.Text(), nullable=True),
        sa.Column("contact_phone", sa.Text(), nullable=True),
        sa.Column("memo_user", sa.Text(), nullable=True),
        sa.Column("memo_admin", sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["profiles.user_id"]),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_bookings_user_id", "bookings", ["user_id"], unique=False)
    op.create_table(
        "product_favorites",
        _uuid_pk(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("product_id", sa.UUID(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["profiles.user_id"]),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_product_favorites_user_id", "product_favorites", ["user_id"], unique=False)
    op.create_table(
        "notices",
        _uuid_pk(),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), server_default=sa.text("''"), nullable=False),
        sa.Column("category", sa.Text(), server_default=sa.text("'일반'"), nullable=False),
        sa.Column("is_pinned", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("is_published", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "inquiries",
        _uuid_pk(),
        sa.Column("user_id", sa.UUID(), nullable=True),
        sa.Column("contact_name", sa.Text(), nullable=False),
        sa.Column("contact_phone", sa.Text(), nullable=False),
        sa.Column("contact_email", sa.Text(), nullable=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("status", sa.Text(), server_default=sa.text("'NEW'"), nullable=False),
        sa.Column("memo_admin", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "site_settings",
        sa.Column("key", sa.Text(), nullable=False),
        sa.Column("value", sa.Text(), server_default=sa.text("''"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("key"),
    )
    op.execute(ADMIN_USERS_SUMMARY_SQL)


def downgrade() -> None:
    op.execute("drop function if exists public.admin_users_summary()")
    op.drop_table("site_settings")
    op.drop_table("inquiries")
    op.drop_table("notices")
    op.drop_index("ix_product_favorites_user_id", table_name="product_favorites")
    op.drop_table("product_favorites")
    op.drop_index("ix_bookings_user_id", table_name="bookings")
    op.drop_table("bookings")
    op.drop_index("ix_products_updated_at", table_name="products")
    op.drop_table("products")
    op.drop_index("ix_product_areas_theme_id", table_name="product_areas")
    op.drop_table("product_areas")
    op.drop_table("product_themes")
    op.drop_table("admin_users")
    op.drop_table("profiles")
