from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from nollyspot.db.base import Base, utcnow
from nollyspot.db.types import TokenAmount

if TYPE_CHECKING:
    from .user import User

PENDING = "pending"
COMPLETED = "completed"
REFUNDING = "refunding"  # refund transfer in flight
REFUNDED = "refunded"


class Transaction(Base):
    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    post_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("posts.id"), nullable=True)

    token_type: Mapped[str] = mapped_column(String(32), nullable=False)
    amount: Mapped[Decimal] = mapped_column(TokenAmount, nullable=False)

    status: Mapped[str] = mapped_column(String(16), index=True, nullable=False, default=PENDING)
    tx_hash: Mapped[str | None] = mapped_column(String(80), nullable=True)
    refund_tx_hash: Mapped[str | None] = mapped_column(String(80), nullable=True)
    refund_amount: Mapped[Decimal | None] = mapped_column(TokenAmount, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    user: Mapped["User"] = relationship(back_populates="transactions")
