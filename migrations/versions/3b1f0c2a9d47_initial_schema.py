"""initial schema

Revision ID: 3b1f0c2a9d47
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision: str = "3b1f0c2a9d47"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = postgresql.ENUM("ADMIN", "CASHIER", name="userrole", create_type=False)
payment_method = postgresql.ENUM("CASH", "BANK", "CREDIT", name="paymentmethod", create_type=False)
repayment_method = postgresql.ENUM("CASH", "BANK", name="repaymentmethod", create_type=False)
customer_type = postgresql.ENUM("REGULAR", "WALKER", name="customertype", create_type=False)
credit_status = postgresql.ENUM("ACCEPTED", "OVERDUE", "PAID", name="creditstatus", create_type=False)


def _timestamps(updated: bool = True):
    columns = [sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True)]
    if updated:
        columns.append(
            sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True)
        )
    return columns


def upgrade() -> None:
    bind = op.get_bind()
    for enum_type in (user_role, payment_method, repayment_method, customer_type, credit_status):
        enum_type.create(bind, checkfirst=True)

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=20), nullable=True),
        sa.Column("role", user_role, nullable=False),
        sa.Column("image", sa.String(length=500), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "customers",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=20), nullable=False),
        sa.Column("address", sa.String(length=255), nullable=False),
        sa.Column("id_card", sa.String(length=500), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "product_categories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "product_types",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("measurement", sa.String(length=50), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["category_id"], ["product_categories.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "product_stocks",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("product_type_id", sa.Integer(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("price_per_quantity", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("amount_money", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["product_type_id"], ["product_types.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("product_type_id"),
    )

    op.create_table(
        "bank_accounts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("branch", sa.String(length=100), nullable=False),
        sa.Column("account_number", sa.String(length=50), nullable=False),
        sa.Column("owner", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "bank_balances",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("bank_id", sa.Integer(), nullable=False),
        sa.Column("balance", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["bank_id"], ["bank_accounts.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_bank_balances_bank_id"), "bank_balances", ["bank_id"], unique=False)

    op.create_table(
        "bank_transactions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("bank_id", sa.Integer(), nullable=False),
        sa.Column("transaction_id", sa.String(length=50), nullable=False),
        sa.Column("in", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("out", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("balance", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("receipt_image", sa.String(length=500), nullable=True),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(["bank_id"], ["bank_accounts.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_bank_transactions_bank_id"), "bank_transactions", ["bank_id"], unique=False)
    op.create_index(op.f("ix_bank_transactions_transaction_id"), "bank_transactions", ["transaction_id"], unique=False)

    op.create_table(
        "cash_balance",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("balance", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "cash_transactions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("transaction_id", sa.String(length=50), nullable=False),
        sa.Column("in", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("out", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("balance", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_cash_transactions_transaction_id"), "cash_transactions", ["transaction_id"], unique=False)

    op.create_table(
        "sales_transactions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("transaction_id", sa.String(length=50), nullable=False),
        sa.Column("type_id", sa.Integer(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("price_per_quantity", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("payment_method", payment_method, nullable=False),
        sa.Column("customer_type", customer_type, nullable=False),
        sa.Column("customer_id", sa.Integer(), nullable=True),
        sa.Column("walker_id", sa.String(length=50), nullable=True),
        sa.Column("bank_id", sa.Integer(), nullable=True),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["type_id"], ["product_types.id"]),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"]),
        sa.ForeignKeyConstraint(["bank_id"], ["bank_accounts.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_sales_transactions_transaction_id"), "sales_transactions", ["transaction_id"], unique=False)

    op.create_table(
        "sales_credits",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("transaction_id", sa.String(length=50), nullable=False),
        sa.Column("customer_id", sa.Integer(), nullable=False),
        sa.Column("total_money", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("issued_date", sa.DateTime(), nullable=False),
        sa.Column("return_date", sa.DateTime(), nullable=False),
        sa.Column("status", credit_status, nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_sales_credits_transaction_id"), "sales_credits", ["transaction_id"], unique=True)

    op.create_table(
        "sales_credit_transactions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("credit_id", sa.Integer(), nullable=False),
        sa.Column("transaction_id", sa.String(length=50), nullable=False),
        sa.Column("amount_payed", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("payment_method", repayment_method, nullable=False),
        sa.Column("outstanding_balance", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("bank_id", sa.Integer(), nullable=True),
        sa.Column("cash_transaction_id", sa.Integer(), nullable=True),
        sa.Column("bank_transaction_id", sa.Integer(), nullable=True),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("image", sa.String(length=500), nullable=True),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(["credit_id"], ["sales_credits.id"]),
        sa.ForeignKeyConstraint(["bank_id"], ["bank_accounts.id"]),
        sa.ForeignKeyConstraint(["cash_transaction_id"], ["cash_transactions.id"]),
        sa.ForeignKeyConstraint(["bank_transaction_id"], ["bank_transactions.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_sales_credit_transactions_credit_id"), "sales_credit_transactions", ["credit_id"], unique=False)
    op.create_index(op.f("ix_sales_credit_transactions_transaction_id"), "sales_credit_transactions", ["transaction_id"], unique=False)

    op.create_table(
        "buy_transactions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("transaction_id", sa.String(length=50), nullable=False),
        sa.Column("type_id", sa.Integer(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("price_per_quantity", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("total_money", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("supplier_name", sa.String(length=255), nullable=False),
        sa.Column("payment_method", payment_method, nullable=False),
        sa.Column("return_date", sa.DateTime(), nullable=True),
        sa.Column("bank_id", sa.Integer(), nullable=True),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["type_id"], ["product_types.id"]),
        sa.ForeignKeyConstraint(["bank_id"], ["bank_accounts.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_buy_transactions_transaction_id"), "buy_transactions", ["transaction_id"], unique=False)

    op.create_table(
        "buy_credits",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("transaction_id", sa.String(length=50), nullable=False),
        sa.Column("supplier_name", sa.String(length=255), nullable=True),
        sa.Column("total_money", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("issued_date", sa.DateTime(), nullable=False),
        sa.Column("return_date", sa.DateTime(), nullable=False),
        sa.Column("status", credit_status, nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_buy_credits_transaction_id"), "buy_credits", ["transaction_id"], unique=True)

    op.create_table(
        "buy_credit_transactions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("credit_id", sa.Integer(), nullable=False),
        sa.Column("transaction_id", sa.String(length=50), nullable=False),
        sa.Column("amount_payed", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("payment_method", repayment_method, nullable=False),
        sa.Column("outstanding_balance", sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column("bank_id", sa.Integer(), nullable=True),
        sa.Column("cash_transaction_id", sa.Integer(), nullable=True),
        sa.Column("bank_transaction_id", sa.Integer(), nullable=True),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("image", sa.String(length=500), nullable=True),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(["credit_id"], ["buy_credits.id"]),
        sa.ForeignKeyConstraint(["bank_id"], ["bank_accounts.id"]),
        sa.ForeignKeyConstraint(["cash_transaction_id"], ["cash_transactions.id"]),
        sa.ForeignKeyConstraint(["bank_transaction_id"], ["bank_transactions.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_buy_credit_transactions_credit_id"), "buy_credit_transactions", ["credit_id"], unique=False)
    op.create_index(op.f("ix_buy_credit_transactions_transaction_id"), "buy_credit_transactions", ["transaction_id"], unique=False)


def downgrade() -> None:
    op.drop_table("buy_credit_transactions")
    op.drop_table("buy_credits")
    op.drop_table("buy_transactions")
    op.drop_table("sales_credit_transactions")
    op.drop_table("sales_credits")
    op.drop_table("sales_transactions")
    op.drop_table("cash_transactions")
    op.drop_table("cash_balance")
    op.drop_table("bank_transactions")
    op.drop_table("bank_balances")
    op.drop_table("bank_accounts")
    op.drop_table("product_stocks")
    op.drop_table("product_types")
    op.drop_table("product_categories")
    op.drop_table("customers")
    op.drop_table("users")

    for enum_type in (credit_status, customer_type, repayment_method, payment_method, user_role):
        enum_type.drop(op.get_bind(), checkfirst=True)
