"""initial schema

Revision ID: 4b1f0c2d9e71
Revises:
Create Date: 2026-10-19 10:12:44.381204

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4b1f0c2d9e71'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade():
    op.create_table(
        "countries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("code", sa.String(8)),
        sa.Column("dial_code", sa.String(16)),
        sa.Column("currency_name", sa.String(64)),
        sa.Column("currency_symbol", sa.String(8)),
        sa.Column("currency_code", sa.String(8)),
        *_timestamps(),
    )
    op.create_table(
        "cities",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("code", sa.String(32)),
        sa.Column("top_destination", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("top_to_visit", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("image_url", sa.String(512)),
        *_timestamps(),
    )
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("first_name", sa.String(255)),
        sa.Column("last_name", sa.String(255)),
        sa.Column("email", sa.String(255)),
        sa.Column("referral_code", sa.String(255)),
        sa.Column("social_id", sa.String(255)),
        sa.Column("social_type", sa.String(32)),
        sa.Column("email_verified_at", sa.DateTime()),
        sa.Column("phone_verified_at", sa.DateTime()),
        sa.Column("sent_email", sa.DateTime()),
        sa.Column("reminder_email", sa.SmallInteger(), server_default="0"),
        sa.Column("password", sa.String(255)),
        sa.Column("country_id", sa.Integer(), sa.ForeignKey("countries.id")),
        sa.Column("phone_number", sa.String(32)),
        sa.Column("is_mobile_registered", sa.SmallInteger(), server_default="0"),
        sa.Column("dob", sa.Date()),
        sa.Column("age", sa.Integer()),
        sa.Column("gender", sa.String(16)),
        sa.Column("profile_image", sa.String(512)),
        sa.Column("status", sa.SmallInteger(), nullable=False, server_default="0"),
        sa.Column("device_type", sa.Integer(), server_default="2"),
        sa.Column("remember_token", sa.String(255)),
        sa.Column("stripe_customer_token", sa.String(255)),
        sa.Column("utm_source", sa.String(255)),
        sa.Column("utm_medium", sa.String(255)),
        sa.Column("lang_code", sa.String(8), server_default="en_GB"),
        sa.Column("is_blocked", sa.SmallInteger(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "registration_otps",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("phone_number", sa.String(32)),
        sa.Column("otp", sa.String(10), nullable=False),
        sa.Column("status", sa.SmallInteger(), nullable=False, server_default="0"),
        sa.Column("email", sa.String(255)),
        sa.Column("expire_at", sa.DateTime()),
        *_timestamps(),
    )
    op.create_index("ix_registration_otps_email", "registration_otps", ["email"])

    for table in ("password_resets", "admin_password_resets"):
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("email", sa.String(255)),
            sa.Column("token", sa.String(64)),
            sa.Column("status", sa.SmallInteger(), nullable=False, server_default="0"),
            *_timestamps(),
        )
        op.create_index(f"ix_{table}_email", table, ["email"])
        op.create_index(f"ix_{table}_token", table, ["token"])

    op.create_table(
        "admins",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("email_verified_at", sa.DateTime()),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("profile_image", sa.String(512)),
        sa.Column("phone_number", sa.String(32)),
        sa.Column("landline", sa.String(32)),
        sa.Column("address", sa.String(255)),
        sa.Column("postal_code", sa.String(32)),
        sa.Column("is_activated", sa.SmallInteger(), nullable=False, server_default="1"),
        sa.Column("remember_token", sa.String(255)),
        *_timestamps(),
    )
    op.create_index("ix_admins_email", "admins", ["email"], unique=True)

    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("article_type", sa.String(64)),
        sa.Column("url", sa.String(512)),
        sa.Column("image_url", sa.String(512)),
        sa.Column("neighbourhood", sa.String(255)),
        sa.Column("canonical_url", sa.String(512)),
        sa.Column("rating_avg", sa.Float(), server_default="0"),
        sa.Column("rating_count", sa.Integer(), server_default="0"),
        sa.Column("pricing_type", sa.String(64)),
        sa.Column("original_price", sa.Float(), server_default="0"),
        sa.Column("final_price", sa.Float(), server_default="0"),
        sa.Column("best_discount", sa.Float(), server_default="0"),
        sa.Column("meta_title", sa.String(255)),
        sa.Column("meta_author", sa.String(255)),
        sa.Column("meta_keyword", sa.String(255)),
        sa.Column("meta_description", sa.String(255)),
        sa.Column("slug", sa.String(255)),
        sa.Column("lang_code", sa.String(8), server_default="en_GB"),
        sa.Column("is_suggested", sa.Integer(), server_default="0"),
        sa.Column("status", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("currency", sa.Text()),
        sa.Column("city_id", sa.Integer(), sa.ForeignKey("cities.id")),
        sa.Column("most_popular", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("top_activities", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_products_slug", "products", ["slug"])

    op.create_table(
        "product_details",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id", ondelete="CASCADE"), nullable=False),
        sa.Column("display_tags", sa.String(255)),
        sa.Column("start_latitude", sa.Float()),
        sa.Column("start_longitude", sa.Float()),
        sa.Column("start_address_line1", sa.String(255)),
        sa.Column("start_address_line2", sa.String(255)),
        sa.Column("start_city", sa.String(255)),
        sa.Column("start_postal_code", sa.String(32)),
        sa.Column("start_country", sa.String(255)),
        sa.Column("end_latitude", sa.Float()),
        sa.Column("end_longitude", sa.Float()),
        sa.Column("end_address_line1", sa.String(255)),
        sa.Column("end_address_line2", sa.String(255)),
        sa.Column("end_city", sa.String(255)),
        sa.Column("end_postal_code", sa.String(32)),
        sa.Column("end_country", sa.String(255)),
        sa.Column("product_type", sa.String(64)),
        sa.Column("has_instant_confirmation", sa.Integer(), server_default="0"),
        sa.Column("has_mobile_ticket", sa.Integer(), server_default="0"),
        sa.Column("has_audio_available", sa.Integer(), server_default="0"),
        *_timestamps(),
    )
    op.create_table(
        "product_media",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id", ondelete="CASCADE"), nullable=False),
        sa.Column("image_url", sa.String(512), nullable=False),
        sa.Column("caption", sa.String(255)),
        sa.Column("web_position", sa.Integer(), server_default="1"),
        sa.Column("mobile_position", sa.Integer(), server_default="1"),
        sa.Column("status", sa.Integer(), server_default="1"),
        *_timestamps(),
    )
    op.create_table(
        "product_meta_infos",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id", ondelete="CASCADE"), nullable=False),
        sa.Column("meta_key", sa.String(255), nullable=False),
        sa.Column("meta_key_html", sa.String(255)),
        sa.Column("meta_value", sa.Text()),
        *_timestamps(),
    )
    op.create_table(
        "product_views",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("ip_address", sa.String(64)),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id", ondelete="CASCADE"), nullable=False),
        sa.Column("page_view", sa.Integer(), server_default="1"),
        sa.Column("device_type", sa.Integer(), server_default="2"),
        sa.Column("utm_source", sa.String(255)),
        sa.Column("utm_medium", sa.String(255)),
        *_timestamps(),
    )

    op.create_table(
        "e_categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("image_url", sa.String(512)),
        sa.Column("status", sa.SmallInteger(), nullable=False, server_default="0"),
        sa.Column("meta_keyword", sa.String(255)),
        sa.Column("meta_description", sa.String(255)),
        sa.Column("position", sa.Integer()),
        sa.Column("slug", sa.String(255)),
        sa.Column("lang_code", sa.String(8), server_default="en_GB"),
        *_timestamps(),
    )
    op.create_index("ix_e_categories_slug", "e_categories", ["slug"])
    op.create_table(
        "e_category_products",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("e_category_id", sa.Integer(), sa.ForeignKey("e_categories.id", ondelete="CASCADE"),
                  nullable=False),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id", ondelete="CASCADE"), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "favourite_products",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id", ondelete="CASCADE"), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "product_id", name="uq_favourite_user_product"),
    )

    op.create_table(
        "promo_codes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("coupon_name", sa.String(255), nullable=False),
        sa.Column("generation_type", sa.String(8), server_default="A"),
        sa.Column("promo_code", sa.String(64), nullable=False),
        sa.Column("coupon_qty", sa.Integer()),
        sa.Column("t_and_c", sa.Text()),
        sa.Column("coupon_type", sa.String(8), nullable=False),
        sa.Column("coupon_value", sa.Integer(), nullable=False),
        sa.Column("available_days", sa.Text()),
        sa.Column("start_date", sa.String(16)),
        sa.Column("end_date", sa.String(16)),
        sa.Column("start_time", sa.String(16)),
        sa.Column("end_time", sa.String(16)),
        sa.Column("device_type", sa.Integer(), server_default="2"),
        sa.Column("exclude_wallet_point", sa.SmallInteger(), server_default="0"),
        sa.Column("include_api_data", sa.SmallInteger(), server_default="1"),
        sa.Column("user_redemption_limit", sa.Integer()),
        sa.Column("remain_user_redemption_limit", sa.Integer()),
        sa.Column("min_cart_amount", sa.Numeric(8, 2), server_default="0"),
        sa.Column("uses_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("batch_qty", sa.Integer(), server_default="1"),
        sa.Column("status", sa.SmallInteger(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("ix_promo_codes_promo_code", "promo_codes", ["promo_code"], unique=True)
    op.create_table(
        "promo_code_uses",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer()),
        sa.Column("guest_id", sa.Integer()),
        sa.Column("promo_code_id", sa.Integer(), sa.ForeignKey("promo_codes.id", ondelete="CASCADE"),
                  nullable=False),
        sa.Column("uses_count", sa.Integer(), server_default="0"),
        *_timestamps(),
    )
    op.create_index("ix_promo_code_uses_user_id", "promo_code_uses", ["user_id"])
    op.create_index("ix_promo_code_uses_guest_id", "promo_code_uses", ["guest_id"])

    op.create_table(
        "itineraries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("device_type", sa.Integer(), server_default="2"),
        sa.Column("user_id", sa.Integer()),
        sa.Column("guest_id", sa.Integer()),
        sa.Column("name", sa.String(255)),
        sa.Column("status", sa.SmallInteger(), nullable=False, server_default="0"),
        sa.Column("visibility", sa.SmallInteger(), server_default="1"),
        sa.Column("expire_at", sa.DateTime()),
        sa.Column("is_visited", sa.SmallInteger(), server_default="0"),
        sa.Column("is_booked", sa.SmallInteger(), nullable=False, server_default="0"),
        sa.Column("utm_source", sa.String(255)),
        sa.Column("utm_medium", sa.String(255)),
        *_timestamps(),
    )
    op.create_index("ix_itineraries_user_id", "itineraries", ["user_id"])
    op.create_index("ix_itineraries_guest_id", "itineraries", ["guest_id"])
    op.create_table(
        "itinerary_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("itinerary_id", sa.Integer(), sa.ForeignKey("itineraries.id", ondelete="CASCADE"),
                  nullable=False),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id"), nullable=False),
        sa.Column("product_name", sa.String(255)),
        sa.Column("position", sa.String(16)),
        sa.Column("itinerary_date", sa.Date(), nullable=False),
        sa.Column("date_time", sa.String(64)),
        sa.Column("variant_id", sa.Integer()),
        sa.Column("variant_name", sa.String(255)),
        sa.Column("variant_item_id", sa.BigInteger()),
        sa.Column("total_price", sa.Numeric(8, 2), server_default="0"),
        sa.Column("product_options", sa.Text()),
        sa.Column("is_excluded", sa.SmallInteger(), server_default="0"),
        sa.Column("is_booked", sa.SmallInteger(), nullable=False, server_default="0"),
        sa.Column("device_type", sa.Integer(), server_default="2"),
        *_timestamps(),
    )

    op.create_table(
        "sales_flat_orders",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer()),
        sa.Column("guest_id", sa.Integer()),
        sa.Column("itinerary_id", sa.Integer(), sa.ForeignKey("itineraries.id", ondelete="SET NULL")),
        sa.Column("order_uuid", sa.String(64)),
        sa.Column("user_name", sa.String(255)),
        sa.Column("user_email", sa.String(255)),
        sa.Column("user_phone", sa.String(32)),
        sa.Column("status", sa.String(16), nullable=False, server_default="initiated"),
        *[sa.Column(name, sa.Numeric(8, 2), server_default="0") for name in (
            "sub_total", "net_total", "grand_total", "tax_amount", "gateway_charges",
            "commission_charges", "discount_amount",
        )],
        sa.Column("coupon_code", sa.String(64)),
        sa.Column("referral_discount", sa.Numeric(8, 2), server_default="0"),
        sa.Column("device_type", sa.Integer(), server_default="2"),
        sa.Column("currency", sa.String(8), server_default="EUR"),
        sa.Column("lang_code", sa.String(8), server_default="en_GB"),
        *_timestamps(),
    )
    for column in ("user_id", "guest_id", "itinerary_id"):
        op.create_index(f"ix_sales_flat_orders_{column}", "sales_flat_orders", [column])

    op.create_table(
        "sales_flat_order_items_meta",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("order_id", sa.Integer(), sa.ForeignKey("sales_flat_orders.id", ondelete="CASCADE"),
                  nullable=False),
        sa.Column("itinerary_item_id", sa.Integer()),
        sa.Column("date", sa.Date()),
        sa.Column("time", sa.String(64)),
        sa.Column("product_id", sa.Integer()),
        sa.Column("product_name", sa.String(255)),
        sa.Column("variant_id", sa.Integer()),
        sa.Column("variant_name", sa.String(255)),
        sa.Column("variant_item_id", sa.BigInteger()),
        sa.Column("total_price", sa.Numeric(8, 2), server_default="0"),
        sa.Column("product_options", sa.Text()),
        sa.Column("is_booked", sa.SmallInteger(), nullable=False, server_default="0"),
        sa.Column("booking_id", sa.String(64)),
        *_timestamps(),
    )
    op.create_table(
        "sales_flat_order_payments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("order_id", sa.Integer(), sa.ForeignKey("sales_flat_orders.id", ondelete="CASCADE"),
                  nullable=False),
        sa.Column("status", sa.SmallInteger(), nullable=False, server_default="0"),
        sa.Column("transaction_id", sa.String(64)),
        sa.Column("reference_id", sa.String(255)),
        sa.Column("reason", sa.Text()),
        sa.Column("total_paid", sa.Numeric(8, 2), server_default="0"),
        *_timestamps(),
    )
    op.create_table(
        "e_tickets",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id")),
        sa.Column("e_ticket_id", sa.String(255)),
        sa.Column("order_id", sa.Integer(), sa.ForeignKey("sales_flat_orders.id", ondelete="CASCADE")),
        sa.Column("ticket_sent", sa.Integer(), server_default="0"),
        sa.Column("day", sa.Text()),
        sa.Column("time_slot", sa.String(64)),
        sa.Column("status", sa.Integer(), server_default="1"),
        *_timestamps(),
    )


def downgrade():
    for table in (
        "e_tickets",
        "sales_flat_order_payments",
        "sales_flat_order_items_meta",
        "sales_flat_orders",
        "itinerary_items",
        "itineraries",
        "promo_code_uses",
        "promo_codes",
        "favourite_products",
        "e_category_products",
        "e_categories",
        "product_views",
        "product_meta_infos",
        "product_media",
        "product_details",
        "products",
        "admins",
        "admin_password_resets",
        "password_resets",
        "registration_otps",
        "users",
        "cities",
        "countries",
    ):
        op.drop_table(table)
