from datetime import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from wgbot.database.base import Base

# Edges at or below this amount are deleted instead of stored
EPSILON = Decimal("0.001")


class DebtEdge(Base):
    """Directed debt: ``debtor`` owes ``creditor`` ``amount``.

    At most one edge exists per unordered pair of people.
    """

    __tablename__ = "balances"

    debtor: Mapped[str] = mapped_column("person_from", String(255), primary_key=True)
    creditor: Mapped[str] = mapped_column("person_to", String(255), primary_key=True, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 4), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    __table_args__ = (
        CheckConstraint("person_from <> person_to", name="check_not_self_debt"),
        CheckConstraint("amount > 0", name="check_debt_amount_positive"),
    )

    def __repr__(self) -> str:
        return f"<DebtEdge(debtor='{self.debtor}', creditor='{self.creditor}', amount={self.amount})>"
