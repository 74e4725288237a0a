from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from nollyspot.models.user import User


def get_user_by_wallet(db: Session, wallet_address: str) -> Optional[User]:
    return db.scalars(select(User).where(User.wallet_address == wallet_address)).first()


def upsert_user(db: Session, wallet_address: str) -> User:
    """
    Return the user owning `wallet_address`, creating it on first sight.

    Must run before anything else is pending in the session: a lost insert
    race rolls the session back and re-reads the winner's row.
    """
    user = get_user_by_wallet(db, wallet_address)
    if user:
        return user

    user = User(wallet_address=wallet_address)
    db.add(user)
    try:
        db.flush()  # get user.id
    except IntegrityError:
        db.rollback()
        user = get_user_by_wallet(db, wallet_address)
        if user is None:
            raise
    return user
