from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from nollyspot.api.routing import DecimalJSONRoute
from nollyspot.core.deps import get_db
from nollyspot.schemas.user import UserUpsert, UserOut
from nollyspot.services.users import upsert_user

router = APIRouter(route_class=DecimalJSONRoute)


@router.post("/user", response_model=UserOut)
def post_user(payload: UserUpsert, db: Session = Depends(get_db)):
    """Create a user for the wallet, or return the existing one."""
    try:
        user = upsert_user(db, payload.wallet_address)
        db.commit()
        db.refresh(user)
        return user
    except Exception:
        db.rollback()
        raise
