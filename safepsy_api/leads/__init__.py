# safepsy_api/leads/__init__.py
from .models import ContactRequest, SubscribeRequest, LeadResponse, LeadRole

__all__ = ["ContactRequest", "SubscribeRequest", "LeadResponse", "LeadRole"]
