from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from nollyspot.api.routing import DecimalJSONRoute
from nollyspot.core.deps import get_payment_service
from nollyspot.core.errors import ChainError, NollySpotError
from nollyspot.schemas.payment import PayRequest, PayResult, CancelRequest, RefundResult
from nollyspot.schemas.transaction import TransactionOut
from nollyspot.services.payments import PaymentService

router = APIRouter(route_class=DecimalJSONRoute)


@router.post("/pay", response_model=PayResult)
def pay(payload: PayRequest, service: PaymentService = Depends(get_payment_service)):
    """Collect a token payment and record it once confirmed on-chain."""
    try:
        result = service.pay(
            token_type=payload.token_type,
            amount=payload.amount,
            user_id=payload.user_id,
            post_id=payload.post_id,
        )
    except ChainError as e:
        logger.error(f"Payment error: {e.message}")
        raise HTTPException(status_code=500, detail={"error": "Payment failed", "reason": e.message})
    except NollySpotError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return PayResult(
        success=result.success,
        tx_hash=result.tx_hash,
        transaction=TransactionOut.model_validate(result.transaction),
    )


@router.post("/cancel", response_model=RefundResult)
def cancel(payload: CancelRequest, service: PaymentService = Depends(get_payment_service)):
    """Refund a completed transaction minus the platform fee."""
    try:
        result = service.refund(payload.transaction_id)
    except ChainError as e:
        logger.error(f"Refund error: {e.message}")
        raise HTTPException(status_code=500, detail={"error": "Refund failed", "reason": e.message})
    except NollySpotError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return RefundResult(
        success=result.success,
        refund_amount=result.refund_amount,
        refund_tx_hash=result.refund_tx_hash,
        transaction=TransactionOut.model_validate(result.transaction),
    )
