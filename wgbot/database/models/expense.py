from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from wgbot.database.base import Base, BigIntegerPK


class Expense(Base):
    """Shared expense. Append-only: rows are never updated or deleted."""

    __tablename__ = "expenses"

    id: Mapped[int] = mapped_column(BigIntegerPK, primary_key=True)
    payer: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    spent_on: Mapped[date] = mapped_column("date", nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        nullable=False
    )

    __table_args__ = (
        CheckConstraint("amount > 0", name="check_expense_amount_positive"),
    )

    def __repr__(self) -> str:
        return f"<Expense(id={self.id}, amount={self.amount}, description='{self.description}')>"
