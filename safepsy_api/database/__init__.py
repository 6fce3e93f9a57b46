# safepsy_api/database/__init__.py
from .connection import DatabaseConnection
from .lead_repository import LeadRepository
from .schema import ensure_lead_tables, lead_table_ddl

__all__ = ["DatabaseConnection", "LeadRepository", "ensure_lead_tables", "lead_table_ddl"]
