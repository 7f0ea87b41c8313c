"""
Messaging API routes
"""

from fastapi import APIRouter, Depends

from eventdesk.api.deps import get_notifications
from eventdesk.core.errors import ValidationError
from eventdesk.schemas.admin import WhatsAppRequest
from eventdesk.services.notifications import NotificationDispatcher
from eventdesk.utils.responses import success_response

router = APIRouter()

@router.post("/send-whatsapp")
async def send_whatsapp(
    request: WhatsAppRequest,
    notifications: NotificationDispatcher = Depends(get_notifications)
):
    """Send a WhatsApp message and report the outcome directly"""
    if not request.to or not request.message:
        raise ValidationError("Both 'to' and 'message' are required")
    result = await notifications.send_whatsapp(request.to, request.message)
    return success_response({"success": True, "sid": result.get("sid")})
