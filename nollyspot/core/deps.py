from typing import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from nollyspot.core.config import Settings
from nollyspot.db.session import session_scope
from nollyspot.services.chain import ChainClient
from nollyspot.services.payments import PaymentService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Generator[Session, None, None]:
    yield from session_scope(request.app.state.session_factory)


def get_chain_client(settings: Settings = Depends(get_app_settings)) -> ChainClient:
    return ChainClient.from_settings(settings)


def get_payment_service(
    db: Session = Depends(get_db),
    chain: ChainClient = Depends(get_chain_client),
    settings: Settings = Depends(get_app_settings),
) -> PaymentService:
    return PaymentService(db, chain, settings)
