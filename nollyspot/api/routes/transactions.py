from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from nollyspot.core.deps import get_db
from nollyspot.schemas.transaction import TransactionOut
from nollyspot.services.payments import list_transactions

router = APIRouter()


@router.get("/transactions", response_model=list[TransactionOut])
def get_transactions(db: Session = Depends(get_db)):
    return list_transactions(db)
