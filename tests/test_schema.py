# tests/test_schema.py
from safepsy_api.database import ensure_lead_tables, lead_table_ddl


def _statement_for(table_name):
    return next(s for s in lead_table_ddl() if s.startswith(f"CREATE TABLE IF NOT EXISTS {table_name}"))


def test_subscription_email_is_unique():
    ddl = _statement_for("email_subscriptions")
    assert "UNIQUE (email)" in ddl
    assert "consent_timestamp TIMESTAMP WITH TIME ZONE" in ddl


def test_contact_messages_allow_repeat_emails():
    ddl = _statement_for("contact_messages")
    assert "UNIQUE" not in ddl
    assert "email VARCHAR(255) NOT NULL" in ddl


def test_indexes_are_created_idempotently():
    statements = lead_table_ddl()
    index_statements = [s for s in statements if s.startswith("CREATE INDEX")]
    assert all("IF NOT EXISTS" in s for s in index_statements)
    assert any("ix_contact_messages_email" in s for s in index_statements)


class RecordingConnection:
    def __init__(self):
        self.executed = []

    async def execute(self, statement):
        self.executed.append(statement)


async def test_ensure_lead_tables_runs_every_statement():
    connection = RecordingConnection()
    await ensure_lead_tables(connection)
    assert connection.executed == lead_table_ddl()
