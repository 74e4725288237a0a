from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from nollyspot.core.deps import get_db

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
def root():
    return "Backend is running!"


@router.get("/health")
def health(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"status": "ok"}
