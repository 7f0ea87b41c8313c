"""
Payment API routes
"""

from fastapi import APIRouter, Depends

from eventdesk.api.deps import get_orchestrator
from eventdesk.schemas.payment import CreateOrderRequest, VerifyPaymentRequest
from eventdesk.services.payment_orchestrator import PaymentOrchestrator
from eventdesk.utils.responses import success_response, error_response

router = APIRouter()

@router.post("/create-order")
async def create_order(
    request: CreateOrderRequest,
    orchestrator: PaymentOrchestrator = Depends(get_orchestrator)
):
    """Create a gateway order for the checkout widget"""
    order = await orchestrator.create_order(
        amount=request.amount,
        currency=request.currency,
        receipt=request.receipt,
        notes=request.notes,
    )
    return success_response(order.model_dump())

@router.post("/verify-payment")
async def verify_payment(
    request: VerifyPaymentRequest,
    orchestrator: PaymentOrchestrator = Depends(get_orchestrator)
):
    """Verify the checkout callback and kick off confirmation emails"""
    result = await orchestrator.verify_payment(
        order_id=request.order_id,
        payment_id=request.payment_id,
        signature=request.signature,
        registration_id=request.registration_id,
        status=request.status,
    )
    if result.success:
        return success_response()
    return error_response(message=result.message, status_code=result.status_code)
