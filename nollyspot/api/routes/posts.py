from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from nollyspot.api.routing import DecimalJSONRoute
from nollyspot.core.deps import get_db
from nollyspot.core.errors import NollySpotError
from nollyspot.schemas.post import PostCreate, PostOut, PostWithUser, PurchaseRequest, PurchaseResult
from nollyspot.schemas.transaction import TransactionOut
from nollyspot.services.posts import PostService

router = APIRouter(route_class=DecimalJSONRoute)


@router.get("/posts", response_model=list[PostWithUser], response_model_exclude_none=True)
def get_posts(
    include_user: bool = Query(False, alias="includeUser", description="Embed the owning user"),
    db: Session = Depends(get_db),
):
    posts = PostService(db).list_posts(include_user=include_user)
    if include_user:
        return posts
    return [PostOut.model_validate(p) for p in posts]


@router.post("/posts", response_model=PostOut)
def create_post(payload: PostCreate, db: Session = Depends(get_db)):
    try:
        return PostService(db).create_post(payload)
    except NollySpotError as e:
        db.rollback()
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/purchase", response_model=PurchaseResult)
def purchase(payload: PurchaseRequest, db: Session = Depends(get_db)):
    """
    Record a post and its pending transaction.

    - **postType**: PROFILE_POST, BLOG_POST or WEBSITE_POST; decides price and token
    """
    try:
        post, tx = PostService(db).purchase(
            wallet_address=payload.wallet_address,
            post_type=payload.post_type,
            title=payload.title,
            message=payload.message,
        )
    except NollySpotError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return PurchaseResult(
        message="Post and transaction recorded!",
        post=PostOut.model_validate(post),
        tx=TransactionOut.model_validate(tx),
    )
