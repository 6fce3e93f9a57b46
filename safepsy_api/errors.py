# safepsy_api/errors.py
from typing import Optional

GENERIC_FAILURE_MESSAGE = "Something went wrong. Please try again later."


class LeadIntakeError(Exception):
    """Base class for errors rendered as {success: false, message}"""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(LeadIntakeError):
    """Client input failed a field rule; message names the first failure"""

    status_code = 400


class RateLimitError(LeadIntakeError):
    status_code = 429

    def __init__(self, retry_after: int, message: str = "Too many requests. Please try again later."):
        super().__init__(message)
        self.retry_after = retry_after


class PersistenceError(LeadIntakeError):
    """Store write failed; callers only ever see the generic message"""

    status_code = 500

    def __init__(self, message: str = GENERIC_FAILURE_MESSAGE):
        super().__init__(message)


class PayloadTooLargeError(LeadIntakeError):
    status_code = 413

    def __init__(self, message: str = "Request body is too large"):
        super().__init__(message)
