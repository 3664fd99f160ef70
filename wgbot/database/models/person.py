from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from wgbot.database.base import Base, BigIntegerPK, TimestampMixin


class Person(Base, TimestampMixin):
    """Roommate taking part in the cleaning rotation and in shared expenses.

    Rotation order is registration order (ascending id).
    """

    __tablename__ = "people"

    id: Mapped[int] = mapped_column(BigIntegerPK, primary_key=True)
    display_name: Mapped[str] = mapped_column("name", String(255), unique=True, nullable=False)
    chat_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    telegram_user_id: Mapped[int | None] = mapped_column(BigInteger, unique=True, nullable=True)

    def __repr__(self) -> str:
        return f"<Person(id={self.id}, name='{self.display_name}')>"
