# safepsy_api/database/lead_repository.py
import logging
import uuid

from safepsy_api.errors import PersistenceError
from safepsy_api.leads.models import ContactMessageCreate, SubscriptionCreate

logger = logging.getLogger(__name__)


class LeadRepository:
    """Writes contact messages and waitlist subscriptions.

    ``database`` is anything with an ``acquire()`` async context manager that
    yields an asyncpg-style connection, normally a ``DatabaseConnection``.
    """

    def __init__(self, database):
        self.database = database

    async def create_contact_message(self, record: ContactMessageCreate) -> str:
        """Insert one contact message and return its id"""
        try:
            message_id = str(uuid.uuid4())

            query = """
                INSERT INTO contact_messages (id, email, full_name, subject, message, ip_hash)
                VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING id
            """

            async with self.database.acquire() as connection:
                await connection.fetchval(
                    query, message_id, record.email, record.full_name,
                    record.subject, record.message, record.ip_hash
                )

            logger.info(f"Contact message stored: {message_id}")
            return message_id

        except Exception as e:
            logger.error(f"Contact form error: {e}")
            raise PersistenceError() from e

    async def upsert_subscription(self, record: SubscriptionCreate) -> bool:
        """Insert a subscription unless the email is already on the list.

        Returns True if a row was created. An existing row is never modified:
        the first submission for an email wins.
        """
        try:
            query = """
                INSERT INTO email_subscriptions (
                    id, email, full_name, role, ip_hash,
                    consent_given, consent_timestamp
                ) VALUES ($1, $2, $3, $4, $5, $6, $7)
                ON CONFLICT (email) DO NOTHING
                RETURNING id
            """

            async with self.database.acquire() as connection:
                created_id = await connection.fetchval(
                    query,
                    str(uuid.uuid4()),
                    record.email,
                    record.full_name,
                    record.role.value if record.role else None,
                    record.ip_hash,
                    record.consent_given,
                    record.consent_timestamp
                )

            if created_id is None:
                logger.info("Subscription already exists, left unchanged")
                return False

            logger.info(f"Subscription created: {created_id}")
            return True

        except Exception as e:
            logger.error(f"Subscription error: {e}")
            raise PersistenceError() from e
