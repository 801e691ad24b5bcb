# burnnote/models/note.py

from sqlalchemy import Boolean, Column, DateTime, String, Text, func
from burnnote.core.note_logic import new_note_id
from burnnote.models.base import Base

class Note(Base):
    __tablename__ = "notes"

    # Random token, also used verbatim in the shared link
    id = Column(String(32), primary_key=True, default=new_note_id)

    # Base64 AES-GCM token; the server never sees plaintext
    ciphertext = Column(Text, nullable=False)

    read = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # Set by the create path (created_at + retention window)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
