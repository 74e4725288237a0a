"""
Post Service
Raw post creation, listing and the purchase flow.
"""
from typing import List

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from nollyspot.core.errors import NotFound
from nollyspot.models.post import Post
from nollyspot.models.transaction import Transaction, PENDING
from nollyspot.models.user import User
from nollyspot.schemas.post import PostCreate
from nollyspot.services.tokens import price_for
from nollyspot.services.users import upsert_user


class PostService:
    """Service for managing posts and purchases."""

    def __init__(self, db: Session):
        self.db = db

    def create_post(self, data: PostCreate) -> Post:
        """
        Create a post with caller-supplied price fields.

        Raises:
            NotFound: If the owning user does not exist
        """
        if self.db.get(User, data.user_id) is None:
            raise NotFound("User not found")

        post = Post(
            title=data.title,
            message=data.message,
            type=data.type,
            price_token=data.price_token,
            price_amount=data.price_amount,
            user_id=data.user_id,
        )
        self.db.add(post)
        self.db.commit()
        self.db.refresh(post)
        return post

    def list_posts(self, include_user: bool = False) -> List[Post]:
        stmt = select(Post).order_by(Post.created_at.desc(), Post.id.desc())
        if include_user:
            stmt = stmt.options(selectinload(Post.user))
        return list(self.db.scalars(stmt).all())

    def purchase(self, wallet_address: str, post_type: str, title: str, message: str) -> tuple[Post, Transaction]:
        """
        Record a purchased post and its pending transaction.

        The price and token always come from the price table.

        Raises:
            ValidationFailed: If post_type is not in the price table
        """
        price = price_for(post_type)

        try:
            user = upsert_user(self.db, wallet_address)

            post = Post(
                title=title,
                message=message,
                type=post_type,
                price_token=price.token,
                price_amount=price.amount,
                user_id=user.id,
            )
            self.db.add(post)
            self.db.flush()  # get post.id

            tx = Transaction(
                user_id=user.id,
                token_type=price.token,
                amount=price.amount,
                post_id=post.id,
                status=PENDING,
            )
            self.db.add(tx)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(post)
        self.db.refresh(tx)
        logger.info(f"Purchase recorded: post={post.id} tx={tx.id} type={post_type} user={user.id}")
        return post, tx
