"""Gateway API credential rows (the externally owned ``api_credentials`` table)."""

from __future__ import annotations

import uuid

from sqlalchemy import Boolean, Column, String, Text, Uuid

from app.db import Base
from app.models.mixins import TimestampMixin


class ApiCredential(Base, TimestampMixin):
    """One external gateway credential belonging to one user.

    Rows are written by the credential management path. Older rows carry the
    key in ``api_key`` (plaintext); newer rows carry ``api_key_encrypted`` in
    the ``iv:ciphertext`` envelope format. This service only reads them.
    """

    __tablename__ = "api_credentials"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String(64), nullable=False, index=True)
    service_name = Column(String(64), nullable=False, index=True)
    username = Column(String(255), nullable=True)
    sender_id = Column(String(64), nullable=True)
    api_key = Column(Text, nullable=True)
    api_key_encrypted = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
