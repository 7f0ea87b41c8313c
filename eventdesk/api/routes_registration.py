"""
Registration API routes
"""

from fastapi import APIRouter, Depends

from eventdesk.api.deps import get_ledger
from eventdesk.core.errors import NotFoundError
from eventdesk.schemas.registration import RegistrationCreate
from eventdesk.services.registration_ledger import RegistrationLedger
from eventdesk.utils.responses import success_response

router = APIRouter()

@router.post("/register")
async def register(
    form: RegistrationCreate,
    ledger: RegistrationLedger = Depends(get_ledger)
):
    """Create a registration, or update the unpaid one with the same email"""
    result = ledger.register(
        full_name=form.full_name,
        email=form.email,
        phone=form.phone,
        org=form.org,
        role=form.role,
        amount=form.amount,
    )
    return success_response(result.model_dump())

@router.get("/registrations")
async def list_registrations(ledger: RegistrationLedger = Depends(get_ledger)):
    """All registrations, most recent first"""
    registrations = ledger.list_all()
    return success_response([r.model_dump(by_alias=True, mode="json") for r in registrations])

@router.get("/registrations/{registration_id}")
async def get_registration(
    registration_id: int,
    ledger: RegistrationLedger = Depends(get_ledger)
):
    """Single registration"""
    registration = ledger.get(registration_id)
    if registration is None:
        raise NotFoundError("Registration not found")
    return success_response(registration.model_dump(by_alias=True, mode="json"))
