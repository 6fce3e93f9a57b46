# tests/test_lead_repository.py
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging

import pytest

from safepsy_api.database import LeadRepository
from safepsy_api.errors import GENERIC_FAILURE_MESSAGE, PersistenceError
from safepsy_api.leads.models import ContactMessageCreate, LeadRole, SubscriptionCreate


class FakeConnection:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def fetchval(self, query, *args):
        self.calls.append((query, args))
        if self.error:
            raise self.error
        return self.result


class FakeDatabase:
    def __init__(self, connection):
        self.connection = connection

    @asynccontextmanager
    async def acquire(self):
        yield self.connection


def subscription(**overrides):
    fields = {"email": "x@y.com", "full_name": "Xavier", "role": LeadRole.CLIENT}
    fields.update(overrides)
    return SubscriptionCreate(**fields)


async def test_contact_message_is_inserted_with_ip_hash():
    connection = FakeConnection(result="ignored")
    repository = LeadRepository(FakeDatabase(connection))

    record = ContactMessageCreate(
        email="a@b.com", full_name="Jo", subject="Hello there",
        message="This is a test message.", ip_hash="abc123"
    )
    message_id = await repository.create_contact_message(record)

    query, args = connection.calls[0]
    assert "INSERT INTO contact_messages" in query
    assert "ON CONFLICT" not in query
    assert args[0] == message_id
    assert args[1:] == ("a@b.com", "Jo", "Hello there", "This is a test message.", "abc123")


async def test_upsert_reports_created_row():
    connection = FakeConnection(result="new-id")
    repository = LeadRepository(FakeDatabase(connection))

    consented_at = datetime(2026, 1, 1, tzinfo=timezone.utc)
    created = await repository.upsert_subscription(
        subscription(consent_given=True, consent_timestamp=consented_at)
    )

    assert created is True
    query, args = connection.calls[0]
    assert "ON CONFLICT (email) DO NOTHING" in query
    assert "DO UPDATE" not in query
    assert args[1:] == ("x@y.com", "Xavier", "client", None, True, consented_at)


async def test_upsert_of_existing_email_is_a_no_op():
    connection = FakeConnection(result=None)
    repository = LeadRepository(FakeDatabase(connection))

    assert await repository.upsert_subscription(subscription(role=None)) is False
    _, args = connection.calls[0]
    assert args[3] is None


@pytest.mark.parametrize("operation", ["contact", "subscribe"])
async def test_database_errors_become_generic_persistence_error(operation, caplog):
    original = ConnectionError("server closed the connection unexpectedly")
    repository = LeadRepository(FakeDatabase(FakeConnection(error=original)))

    with caplog.at_level(logging.ERROR):
        with pytest.raises(PersistenceError) as exc_info:
            if operation == "contact":
                await repository.create_contact_message(ContactMessageCreate(
                    email="a@b.com", full_name="Jo", subject="Hello there",
                    message="This is a test message."
                ))
            else:
                await repository.upsert_subscription(subscription())

    assert exc_info.value.message == GENERIC_FAILURE_MESSAGE
    assert exc_info.value.__cause__ is original
    assert "server closed the connection" in caplog.text
