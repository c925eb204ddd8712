from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("full_name", sa.String(length=255)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "tutors",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), unique=True),
        sa.Column("wallet_balance", sa.Numeric(12, 2), server_default="0"),
    )
    op.create_index("ix_tutors_user_id", "tutors", ["user_id"])

    op.create_table(
        "booking_plans",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("tutor_id", sa.Integer(), sa.ForeignKey("tutors.id", ondelete="CASCADE")),
        sa.Column("title", sa.String(length=255), server_default=""),
        sa.Column("price_per_hour", sa.Numeric(10, 2)),
        sa.Column("meeting_url", sa.String(length=512)),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true()),
    )
    op.create_index("ix_booking_plans_tutor_id", "booking_plans", ["tutor_id"])

    payment_type = postgresql.ENUM("course", "booking", name="paymenttype", create_type=False)
    payment_type.create(op.get_bind(), checkfirst=True)
    payment_status = postgresql.ENUM(
        "pending", "paid", "failed", "refunded", name="paymentstatus", create_type=False
    )
    payment_status.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL")),
        sa.Column("tutor_id", sa.Integer(), sa.ForeignKey("tutors.id")),
        sa.Column("payment_type", payment_type, nullable=False),
        sa.Column("status", payment_status, server_default="pending"),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("net_amount", sa.Numeric(12, 2)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_payments_tutor_id", "payments", ["tutor_id"])

    slot_status = postgresql.ENUM(
        "available", "locked", "paid", "canceled", name="slotstatus", create_type=False
    )
    slot_status.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "booking_plan_slots",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id")),
        sa.Column("tutor_id", sa.Integer(), sa.ForeignKey("tutors.id"), nullable=False),
        sa.Column("booking_plan_id", sa.Integer(), sa.ForeignKey("booking_plans.id")),
        sa.Column("payment_id", sa.Integer(), sa.ForeignKey("payments.id")),
        sa.Column("status", slot_status, server_default="available"),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("learner_join", sa.Boolean(), server_default=sa.false()),
        sa.Column("learner_evidence", sa.String(length=1024)),
        sa.Column("tutor_join", sa.Boolean(), server_default=sa.false()),
        sa.Column("tutor_evidence", sa.String(length=1024)),
        sa.Column("reminder_sent", sa.Boolean(), server_default=sa.false()),
    )
    op.create_index("ix_booking_plan_slots_user_id", "booking_plan_slots", ["user_id"])
    op.create_index("ix_booking_plan_slots_tutor_id", "booking_plan_slots", ["tutor_id"])
    op.create_index("ix_booking_plan_slots_payment_id", "booking_plan_slots", ["payment_id"])
    op.create_index("ix_booking_plan_slots_start_time", "booking_plan_slots", ["start_time"])

    refund_status = postgresql.ENUM(
        "pending", "submitted", "approved", "rejected", name="refundstatus", create_type=False
    )
    refund_status.create(op.get_bind(), checkfirst=True)
    refund_type = postgresql.ENUM("complaint", name="refundtype", create_type=False)
    refund_type.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "refund_requests",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("booking_plan_id", sa.Integer(), sa.ForeignKey("booking_plans.id")),
        sa.Column("slot_id", sa.Integer(), sa.ForeignKey("booking_plan_slots.id")),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id")),
        sa.Column("tutor_id", sa.Integer(), sa.ForeignKey("tutors.id")),
        sa.Column("refund_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("status", refund_status, server_default="pending"),
        sa.Column("refund_type", refund_type, server_default="complaint"),
        sa.Column("reason", sa.String(length=1024)),
        sa.Column("tutor_attend", sa.Boolean()),
        sa.Column("tutor_responded_at", sa.DateTime(timezone=True)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_refund_requests_slot_id", "refund_requests", ["slot_id"])

    notification_kind = postgresql.ENUM(
        "booking_reminder",
        "refund_available",
        "booking_complaint_to_tutor",
        name="notificationkind",
        create_type=False,
    )
    notification_kind.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE")),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("kind", notification_kind, nullable=False),
        sa.Column("primary_action_url", sa.String(length=512)),
        sa.Column("is_read", sa.Boolean(), server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_notifications_user_id", table_name="notifications")
    op.drop_table("notifications")
    op.drop_index("ix_refund_requests_slot_id", table_name="refund_requests")
    op.drop_table("refund_requests")
    op.drop_index("ix_booking_plan_slots_start_time", table_name="booking_plan_slots")
    op.drop_index("ix_booking_plan_slots_payment_id", table_name="booking_plan_slots")
    op.drop_index("ix_booking_plan_slots_tutor_id", table_name="booking_plan_slots")
    op.drop_index("ix_booking_plan_slots_user_id", table_name="booking_plan_slots")
    op.drop_table("booking_plan_slots")
    op.drop_index("ix_payments_tutor_id", table_name="payments")
    op.drop_table("payments")
    op.drop_index("ix_booking_plans_tutor_id", table_name="booking_plans")
    op.drop_table("booking_plans")
    op.drop_index("ix_tutors_user_id", table_name="tutors")
    op.drop_table("tutors")
    op.drop_table("users")

    for enum_name in (
        "notificationkind",
        "refundtype",
        "refundstatus",
        "slotstatus",
        "paymentstatus",
        "paymenttype",
    ):
        postgresql.ENUM(name=enum_name).drop(op.get_bind(), checkfirst=True)
