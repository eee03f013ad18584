from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import relationship

from kakeibo.core.database import Base
from kakeibo.domain.enums import FlowType, PayerType, enum_values


class Transaction(Base):
    """A single income or expense entry on a calendar date."""

    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
        Index("ix_transactions_date", "date"),
        Index("ix_transactions_recurring_date", "recurring_transaction_id", "date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False)
    type = Column(
        Enum(FlowType, native_enum=False, length=20, values_callable=enum_values),
        nullable=False,
    )
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    payer = Column(
        Enum(PayerType, native_enum=False, length=20, values_callable=enum_values),
        nullable=False,
    )
    amount = Column(Integer, nullable=False)  # smallest currency unit
    memo = Column(String(255), nullable=True)
    recurring_transaction_id = Column(
        Integer,
        ForeignKey("recurring_transactions.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    category = relationship("Category", back_populates="transactions")
    recurring_transaction = relationship("RecurringTransaction", back_populates="transactions")
