from .user import UserUpsert, UserOut
from .transaction import TransactionOut
from .post import PostCreate, PostOut, PostWithUser, PurchaseRequest, PurchaseResult
from .payment import PayRequest, PayResult, CancelRequest, RefundResult

__all__ = [
    "UserUpsert",
    "UserOut",
    "TransactionOut",
    "PostCreate",
    "PostOut",
    "PostWithUser",
    "PurchaseRequest",
    "PurchaseResult",
    "PayRequest",
    "PayResult",
    "CancelRequest",
    "RefundResult",
]
