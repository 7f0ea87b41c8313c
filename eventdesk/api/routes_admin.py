"""
Admin API routes
"""

from fastapi import APIRouter, Depends

from eventdesk.api.deps import get_admin_auth
from eventdesk.schemas.admin import AdminLogin
from eventdesk.services.admin_auth import AdminAuth
from eventdesk.utils.responses import success_response

router = APIRouter()

@router.post("/login")
async def login(
    credentials: AdminLogin,
    admin_auth: AdminAuth = Depends(get_admin_auth)
):
    """One-shot credential check; no session or token is issued"""
    admin_auth.login(credentials.email, credentials.password)
    return success_response()
