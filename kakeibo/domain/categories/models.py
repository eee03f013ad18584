from datetime import datetime

from sqlalchemy import Column, DateTime, Enum, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from kakeibo.core.database import Base
from kakeibo.domain.enums import FlowType, enum_values


class Category(Base):
    """Category model representing transaction categories."""

    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint("name", name="uq_categories_name"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    type = Column(
        Enum(FlowType, native_enum=False, length=20, values_callable=enum_values),
        nullable=False,
    )
    icon = Column(String, nullable=True)
    color = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    transactions = relationship("Transaction", back_populates="category", passive_deletes=True)
    recurring_transactions = relationship(
        "RecurringTransaction",
        back_populates="category",
        passive_deletes=True,
    )
