# tests/conftest.py
import httpx
import pytest

from safepsy_api.config import Settings
from safepsy_api.errors import PersistenceError
from safepsy_api.main import create_app

TEST_SALT = "0123456789abcdef0123456789abcdef"


class InMemoryLeadRepository:
    """Honours the LeadRepository contracts without a database"""

    def __init__(self):
        self.contact_messages = []
        self.subscriptions = {}
        self.fail = False

    async def create_contact_message(self, record):
        if self.fail:
            raise PersistenceError()
        self.contact_messages.append(record.model_copy())
        return str(len(self.contact_messages))

    async def upsert_subscription(self, record):
        if self.fail:
            raise PersistenceError()
        if record.email in self.subscriptions:
            return False
        self.subscriptions[record.email] = record.model_copy()
        return True


def make_settings(**overrides) -> Settings:
    values = {
        "_env_file": None,
        "environment": "test",
        "ip_hashing_enabled": False,
        "ip_salt": None,
        "rate_limit_max_requests": 100,
        "rate_limit_window_seconds": 60,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def repository():
    return InMemoryLeadRepository()


@pytest.fixture
def app(settings, repository):
    return create_app(settings=settings, repository=repository)


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
