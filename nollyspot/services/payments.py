"""
Payment Service
Collects token payments and refunds completed ones.

Every call is a stateless read-modify-write against the store around a
single blocking token transfer. Nothing is retried.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from loguru import logger
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from nollyspot.core.config import Settings
from nollyspot.core.errors import AlreadyRefunded, NotFound, ValidationFailed
from nollyspot.core.logging import mask_address
from nollyspot.db.base import utcnow
from nollyspot.models.post import Post
from nollyspot.models.transaction import Transaction, COMPLETED, REFUNDING, REFUNDED
from nollyspot.models.user import User
from nollyspot.services.chain import ChainClient
from nollyspot.services.tokens import TokenRegistry, from_base_units, refund_amount, to_base_units, to_decimal


@dataclass
class PaymentResult:
    success: bool
    tx_hash: str
    transaction: Transaction


@dataclass
class RefundResult:
    success: bool
    refund_amount: Decimal
    refund_tx_hash: str
    transaction: Transaction


class PaymentService:
    """Service for token payments and refunds."""

    def __init__(self, db: Session, chain: ChainClient, settings: Settings):
        self.db = db
        self.chain = chain
        self.settings = settings
        self.tokens = TokenRegistry.from_settings(settings)

    def pay(self, token_type: str, amount, user_id: int, post_id: Optional[int] = None) -> PaymentResult:
        """
        Transfer `amount` of `token_type` to the merchant address and record
        a completed transaction once the transfer is confirmed.

        Args:
            token_type: Token symbol, e.g. "$NOLLYSPOT"
            amount: Amount in human token units
            user_id: Paying user
            post_id: Optional post the payment is for

        Returns:
            PaymentResult with the transfer hash and the stored row

        Raises:
            ValidationFailed: Unknown token or malformed amount
            NotFound: User or post does not exist
            ChainError: The transfer failed; nothing is written
        """
        token = self.tokens.resolve(token_type)
        units = to_base_units(amount, token.decimals)

        if self.db.get(User, user_id) is None:
            raise NotFound("User not found")
        if post_id is not None and self.db.get(Post, post_id) is None:
            raise NotFound("Post not found")

        logger.info(f"Payment started: user={user_id} token={token.symbol} amount={amount}")
        tx_hash = self.chain.transfer(token.address, self.settings.merchant_address, units)

        # the row is only written after confirmation
        try:
            tx = Transaction(
                user_id=user_id,
                post_id=post_id,
                token_type=token.symbol,
                amount=to_decimal(amount),
                status=COMPLETED,
                tx_hash=tx_hash,
            )
            self.db.add(tx)
            self.db.commit()
            self.db.refresh(tx)
        except Exception:
            self.db.rollback()
            logger.exception(
                f"Payment {tx_hash} confirmed on-chain but NOT recorded "
                f"(user={user_id} token={token.symbol} amount={amount}); reconcile manually"
            )
            raise

        logger.info(f"Payment completed: tx={tx.id} hash={tx_hash}")
        return PaymentResult(success=True, tx_hash=tx_hash, transaction=tx)

    def refund(self, transaction_id: int) -> RefundResult:
        """
        Refund a completed transaction minus the platform fee to the
        configured refund address.

        The transaction is claimed with a conditional status update before
        the transfer, so concurrent refunds of the same id cannot both pass.
        A failed transfer releases the claim and leaves it "completed".

        Raises:
            NotFound: Transaction does not exist
            AlreadyRefunded: Refunded, or a refund is in flight
            ValidationFailed: Transaction was never paid on-chain
            ChainError: The transfer failed
        """
        tx = self.db.get(Transaction, transaction_id)
        if tx is None:
            raise NotFound("Transaction not found")
        if tx.status in (REFUNDED, REFUNDING):
            raise AlreadyRefunded("Transaction already refunded")
        if tx.status != COMPLETED:
            raise ValidationFailed("Only completed transactions can be refunded")

        token = self.tokens.resolve(tx.token_type)
        # sub-unit dust from the fee split stays with the platform
        units = to_base_units(
            refund_amount(tx.amount, self.settings.platform_fee_percent),
            token.decimals,
            round_down=True,
        )
        amount = from_base_units(units, token.decimals)

        self._claim(tx)

        logger.info(
            f"Refund started: tx={tx.id} amount={amount} {token.symbol} "
            f"to={mask_address(self.settings.refund_address)}"
        )
        try:
            refund_hash = self.chain.transfer(token.address, self.settings.refund_address, units)
        except Exception:
            logger.warning(f"Refund transfer failed for tx={tx.id}; releasing claim")
            self._release(tx)
            raise

        try:
            tx.status = REFUNDED
            tx.refund_tx_hash = refund_hash
            tx.refund_amount = amount
            self.db.commit()
            self.db.refresh(tx)
        except Exception:
            self.db.rollback()
            logger.exception(
                f"Refund {refund_hash} confirmed on-chain but tx={tx.id} is still "
                f"'{REFUNDING}'; reconcile manually"
            )
            raise

        logger.info(f"Refund completed: tx={tx.id} hash={refund_hash}")
        return RefundResult(success=True, refund_amount=amount, refund_tx_hash=refund_hash, transaction=tx)

    def _set_status(self, tx: Transaction, expected: str, new: str) -> bool:
        result = self.db.execute(
            update(Transaction)
            .where(Transaction.id == tx.id, Transaction.status == expected)
            .values(status=new, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        self.db.refresh(tx)
        return result.rowcount == 1

    def _claim(self, tx: Transaction) -> None:
        if not self._set_status(tx, COMPLETED, REFUNDING):
            raise AlreadyRefunded("Transaction already refunded")

    def _release(self, tx: Transaction) -> None:
        try:
            self._set_status(tx, REFUNDING, COMPLETED)
        except Exception:
            self.db.rollback()
            logger.exception(f"Could not release refund claim on tx={tx.id}")


def list_transactions(db: Session) -> list[Transaction]:
    stmt = select(Transaction).order_by(Transaction.created_at.desc(), Transaction.id.desc())
    return list(db.scalars(stmt).all())
