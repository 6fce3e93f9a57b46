# safepsy_api/utils/ip_hashing.py
import hashlib
import logging
from typing import Optional

from safepsy_api.config import MIN_SALT_LENGTH, Settings

logger = logging.getLogger(__name__)


class IPHasher:
    """One-way SHA-256 of ip + salt, so abuse can be correlated without storing IPs.

    Hashing is best-effort: when it is disabled, misconfigured, or there is no
    IP to hash, ``hash`` returns None and the submission goes ahead unhashed.
    """

    def __init__(self, enabled: bool = False, salt: Optional[str] = None):
        self.enabled = enabled
        self.salt = salt or ""

    @classmethod
    def from_settings(cls, settings: Settings) -> "IPHasher":
        return cls(enabled=settings.ip_hashing_enabled, salt=settings.ip_salt)

    def hash(self, ip: Optional[str]) -> Optional[str]:
        if not self.enabled:
            return None

        if len(self.salt) < MIN_SALT_LENGTH:
            logger.warning("IP_SALT is not secure. IP hashing disabled.")
            return None

        if not ip or not ip.strip():
            return None

        return hashlib.sha256((ip + self.salt).encode()).hexdigest()
