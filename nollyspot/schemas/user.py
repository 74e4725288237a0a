from datetime import datetime

from pydantic import Field

from .common import CamelModel


class UserUpsert(CamelModel):
    wallet_address: str = Field(..., min_length=1, max_length=64)


class UserOut(CamelModel):
    id: int
    wallet_address: str
    created_at: datetime
