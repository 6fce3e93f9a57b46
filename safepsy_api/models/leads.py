# safepsy_api/models/leads.py
from sqlalchemy import Boolean, Column, DateTime, Index, String, Text, func, text
from sqlalchemy.orm import declarative_base
import uuid

Base = declarative_base()


class ContactMessage(Base):
    __tablename__ = "contact_messages"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), nullable=False, index=True)  # not unique, repeat messages allowed
    full_name = Column(String(100), nullable=False)
    subject = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    ip_hash = Column(String(64), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class EmailSubscription(Base):
    __tablename__ = "email_subscriptions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, nullable=False)
    full_name = Column(String(100), nullable=True)
    role = Column(String(50), nullable=True)  # client, therapist, partner
    ip_hash = Column(String(64), nullable=True)
    consent_given = Column(Boolean, nullable=False, server_default=text("false"))
    consent_timestamp = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (Index("idx_email_subscriptions_created", "created_at"),)
