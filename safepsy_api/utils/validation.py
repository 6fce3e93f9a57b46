# safepsy_api/utils/validation.py
import logging
import re
from typing import Optional

from safepsy_api.errors import ValidationError
from safepsy_api.leads.models import (
    ContactMessageCreate,
    ContactRequest,
    LeadRole,
    SubscribeRequest,
    SubscriptionCreate,
)

logger = logging.getLogger(__name__)

# Deliberately loose: anything@anything.tld, no whitespace and a single @
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

EMAIL_MAX_LENGTH = 255
FULL_NAME_MIN_LENGTH = 2
FULL_NAME_MAX_LENGTH = 100
SUBJECT_MIN_LENGTH = 5
SUBJECT_MAX_LENGTH = 200
MESSAGE_MIN_LENGTH = 10
MESSAGE_MAX_LENGTH = 2000
ROLE_MAX_LENGTH = 50

VALID_ROLES = [role.value for role in LeadRole]


def _reject(message: str):
    logger.info(f"Lead rejected: {message}")
    raise ValidationError(message)


def clean_text(
    value: Optional[str],
    label: str,
    required: bool = True,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
) -> Optional[str]:
    """Trim a text field and apply required -> min length -> max length"""
    text = (value or "").strip()

    if not text:
        if required:
            _reject(f"{label} is required")
        return None

    if min_length is not None and len(text) < min_length:
        _reject(f"{label} must be at least {min_length} characters")

    if max_length is not None and len(text) > max_length:
        _reject(f"{label} must not exceed {max_length} characters")

    return text


def validate_email(email: Optional[str]) -> str:
    """Normalize an email address (trim + lowercase) and check its format"""
    normalized = (email or "").strip().lower()

    if not normalized:
        _reject("Email is required")

    if not EMAIL_PATTERN.match(normalized):
        _reject("Please provide a valid email address")

    if len(normalized) > EMAIL_MAX_LENGTH:
        _reject(f"Email must not exceed {EMAIL_MAX_LENGTH} characters")

    return normalized


def validate_role(role: Optional[str]) -> Optional[LeadRole]:
    text = (role or "").strip()
    if not text:
        return None

    if text not in VALID_ROLES:
        _reject(f"Role must be one of: {', '.join(VALID_ROLES)}")

    if len(text) > ROLE_MAX_LENGTH:
        _reject(f"Role must not exceed {ROLE_MAX_LENGTH} characters")

    return LeadRole(text)


def validate_contact(payload: ContactRequest) -> ContactMessageCreate:
    """Validate a contact form submission, raising on the first failing rule"""
    email = validate_email(payload.email)
    full_name = clean_text(
        payload.full_name, "Full name",
        min_length=FULL_NAME_MIN_LENGTH, max_length=FULL_NAME_MAX_LENGTH
    )
    subject = clean_text(
        payload.subject, "Subject",
        min_length=SUBJECT_MIN_LENGTH, max_length=SUBJECT_MAX_LENGTH
    )
    message = clean_text(
        payload.message, "Message",
        min_length=MESSAGE_MIN_LENGTH, max_length=MESSAGE_MAX_LENGTH
    )

    return ContactMessageCreate(
        email=email,
        full_name=full_name,
        subject=subject,
        message=message,
    )


def validate_subscription(payload: SubscribeRequest) -> SubscriptionCreate:
    """Validate a waitlist signup; only the email is mandatory"""
    email = validate_email(payload.email)
    full_name = clean_text(
        payload.full_name, "Full name",
        required=False, max_length=FULL_NAME_MAX_LENGTH
    )
    role = validate_role(payload.role)

    return SubscriptionCreate(
        email=email,
        full_name=full_name,
        role=role,
        consent_given=payload.has_consent,
    )
