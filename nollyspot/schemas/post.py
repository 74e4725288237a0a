"""
Post Schemas for API Request/Response
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from .common import Amount, CamelModel
from .transaction import TransactionOut
from .user import UserOut



class PostCreate(CamelModel):
    """Raw post creation; every field is required."""
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1, max_length=32)
    price_token: str = Field(..., min_length=1, max_length=32)
    price_amount: Decimal = Field(..., gt=0)
    user_id: int = Field(..., gt=0)


class PostOut(CamelModel):
    id: int
    title: str
    message: str
    type: str
    price_token: str
    price_amount: Amount
    user_id: int
    created_at: datetime


class PostWithUser(PostOut):
    user: Optional[UserOut] = None


class PurchaseRequest(CamelModel):
    """Purchase of a listing; price and token come from the price table."""
    wallet_address: str = Field(..., min_length=1, max_length=64)
    post_type: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)


class PurchaseResult(CamelModel):
    message: str
    post: PostOut
    tx: TransactionOut
