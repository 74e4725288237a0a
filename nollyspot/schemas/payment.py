from decimal import Decimal
from typing import Optional

from pydantic import Field

from .common import Amount, CamelModel
from .transaction import TransactionOut


class PayRequest(CamelModel):
    token_type: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0)
    user_id: int = Field(..., gt=0)
    post_id: Optional[int] = Field(None, gt=0)


class PayResult(CamelModel):
    success: bool
    tx_hash: str
    transaction: TransactionOut


class CancelRequest(CamelModel):
    transaction_id: int = Field(..., gt=0)


class RefundResult(CamelModel):
    success: bool
    refund_amount: Amount
    refund_tx_hash: str
    transaction: TransactionOut
