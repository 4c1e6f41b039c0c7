"""User and AuditLog models.

Users authenticate with email/password and receive JWT tokens.
AuditLog records all state-changing operations for accountability.
"""

from sqlalchemy import Column, String, DateTime, Boolean, Integer, Text, ForeignKey
from sqlalchemy.sql import func
from ..database import Base


class User(Base):
    """Gallery account. Owns folders and photos."""

    __tablename__ = "users"

    user_id = Column(String(50), primary_key=True)
    display_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(Text, nullable=False)
    role = Column(String(20), nullable=False, default="user")
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class AuditLog(Base):
    """Immutable record of state-changing operations.

    Written by the service layer, never modified.
    Fields:
        action         folder_create, folder_delete, folder_verify_failed,
                       photo_upload, photo_delete, login, login_failed
        resource_type  folder, photo, user
        resource_id    ID of the affected resource
        details        JSON string with additional context
    """

    __tablename__ = "audit_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # No foreign key: entries outlive the users and folders they mention.
    user_id = Column(String(50), nullable=True, index=True)
    action = Column(String(50), nullable=False)
    resource_type = Column(String(50), nullable=False)
    resource_id = Column(String(255), nullable=True)
    details = Column(Text, nullable=True)
    ip_address = Column(String(45), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
