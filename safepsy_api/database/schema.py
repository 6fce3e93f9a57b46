# safepsy_api/database/schema.py
import logging
from typing import List

from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateIndex, CreateTable

from safepsy_api.models.leads import Base

logger = logging.getLogger(__name__)


def lead_table_ddl() -> List[str]:
    """PostgreSQL DDL for the lead tables and their indexes, idempotent"""
    dialect = postgresql.dialect()
    statements = []
    for table in Base.metadata.sorted_tables:
        statements.append(str(CreateTable(table, if_not_exists=True).compile(dialect=dialect)).strip())
        for index in sorted(table.indexes, key=lambda ix: ix.name):
            statements.append(str(CreateIndex(index, if_not_exists=True).compile(dialect=dialect)).strip())
    return statements


async def ensure_lead_tables(connection):
    for statement in lead_table_ddl():
        await connection.execute(statement)
    logger.info("Lead tables ready")
