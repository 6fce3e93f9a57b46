# safepsy_api/leads/dependencies.py
from fastapi import Request

from safepsy_api.errors import RateLimitError
from safepsy_api.leads.service import LeadIntakeService
from safepsy_api.utils.rate_limiting import RateLimiter, get_client_ip


def get_lead_service(request: Request) -> LeadIntakeService:
    return request.app.state.lead_service


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def rate_limit(endpoint: str):
    """Router dependency that rejects over-limit clients before the body is handled"""

    async def enforce_rate_limit(request: Request):
        limiter = get_rate_limiter(request)
        identifier = get_client_ip(request) or "unknown"

        if not limiter.check_rate_limit(identifier, endpoint=endpoint):
            raise RateLimitError(retry_after=limiter.retry_after(identifier, endpoint=endpoint))

    return enforce_rate_limit
