from datetime import datetime
from typing import Literal, Optional

from .common import Amount, CamelModel

TransactionStatus = Literal["pending", "completed", "refunding", "refunded"]


class TransactionOut(CamelModel):
    id: int
    user_id: int
    post_id: Optional[int] = None
    token_type: str
    amount: Amount
    status: TransactionStatus
    tx_hash: Optional[str] = None
    refund_tx_hash: Optional[str] = None
    refund_amount: Optional[Amount] = None
    created_at: datetime
