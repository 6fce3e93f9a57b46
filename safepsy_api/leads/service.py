# safepsy_api/leads/service.py
import logging
from datetime import datetime, timezone

from safepsy_api.leads.models import ContactRequest, SubscribeRequest
from safepsy_api.utils.ip_hashing import IPHasher
from safepsy_api.utils.validation import validate_contact, validate_subscription

logger = logging.getLogger(__name__)

CONTACT_SUCCESS_MESSAGE = "Thank you for your message! We'll get back to you soon."
SUBSCRIBE_SUCCESS_MESSAGE = "Thanks! We'll email you product updates."


class LeadIntakeService:
    """validate -> hash the caller's IP -> persist, for both lead forms"""

    def __init__(self, repository, ip_hasher: IPHasher):
        self.repository = repository
        self.ip_hasher = ip_hasher

    async def submit_contact(self, payload: ContactRequest, client_ip: str) -> str:
        record = validate_contact(payload)
        record.ip_hash = self.ip_hasher.hash(client_ip)

        await self.repository.create_contact_message(record)
        return CONTACT_SUCCESS_MESSAGE

    async def submit_subscription(self, payload: SubscribeRequest, client_ip: str) -> str:
        record = validate_subscription(payload)
        record.ip_hash = self.ip_hasher.hash(client_ip)
        if record.consent_given:
            record.consent_timestamp = datetime.now(timezone.utc)

        created = await self.repository.upsert_subscription(record)
        if not created:
            logger.info("Repeat waitlist signup ignored")
        return SUBSCRIBE_SUCCESS_MESSAGE
