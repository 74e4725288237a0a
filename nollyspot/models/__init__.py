from .user import User
from .post import Post
from .transaction import Transaction

__all__ = ["User", "Post", "Transaction"]
