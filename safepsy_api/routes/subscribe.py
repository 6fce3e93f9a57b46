# safepsy_api/routes/subscribe.py
from fastapi import APIRouter, Depends, Request

from safepsy_api.leads.dependencies import get_lead_service, rate_limit
from safepsy_api.leads.models import LeadResponse, SubscribeRequest
from safepsy_api.leads.service import LeadIntakeService
from safepsy_api.utils.rate_limiting import get_client_ip

router = APIRouter(
    prefix="/api/subscribe",
    tags=["subscribe"],
    dependencies=[Depends(rate_limit("subscribe"))]
)


@router.post("", response_model=LeadResponse)
async def subscribe(
    payload: SubscribeRequest,
    req: Request,
    service: LeadIntakeService = Depends(get_lead_service)
):
    """Join the waitlist; repeat signups for the same email are accepted but not stored again"""
    message = await service.submit_subscription(payload, client_ip=get_client_ip(req))
    return LeadResponse(success=True, message=message)
