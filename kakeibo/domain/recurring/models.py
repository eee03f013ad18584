from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    true,
)
from sqlalchemy.orm import relationship

from kakeibo.core.database import Base
from kakeibo.domain.enums import FlowType, PayerType, enum_values

# Days present in every month
MIN_DAY_OF_MONTH = 1
MAX_DAY_OF_MONTH = 28


class RecurringTransaction(Base):
    """Template that materializes one transaction per month on ``day_of_month``."""

    __tablename__ = "recurring_transactions"
    __table_args__ = (
        CheckConstraint(
            f"day_of_month BETWEEN {MIN_DAY_OF_MONTH} AND {MAX_DAY_OF_MONTH}",
            name="ck_recurring_transactions_day_of_month",
        ),
        CheckConstraint("amount > 0", name="ck_recurring_transactions_amount_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    day_of_month = Column(Integer, nullable=False, index=True)
    type = Column(
        Enum(FlowType, native_enum=False, length=20, values_callable=enum_values),
        nullable=False,
    )
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    payer = Column(
        Enum(PayerType, native_enum=False, length=20, values_callable=enum_values),
        nullable=False,
    )
    amount = Column(Integer, nullable=False)
    memo = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True, server_default=true(), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    category = relationship("Category", back_populates="recurring_transactions")
    transactions = relationship(
        "Transaction",
        back_populates="recurring_transaction",
        passive_deletes=True,
    )
