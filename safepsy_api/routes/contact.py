# safepsy_api/routes/contact.py
from fastapi import APIRouter, Depends, Request

from safepsy_api.leads.dependencies import get_lead_service, rate_limit
from safepsy_api.leads.models import ContactRequest, LeadResponse
from safepsy_api.leads.service import LeadIntakeService
from safepsy_api.utils.rate_limiting import get_client_ip

router = APIRouter(
    prefix="/api/contact",
    tags=["contact"],
    dependencies=[Depends(rate_limit("contact"))]
)


@router.post("", response_model=LeadResponse)
async def submit_contact(
    payload: ContactRequest,
    req: Request,
    service: LeadIntakeService = Depends(get_lead_service)
):
    """Store a contact form message"""
    message = await service.submit_contact(payload, client_ip=get_client_ip(req))
    return LeadResponse(success=True, message=message)
