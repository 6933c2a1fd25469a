from datetime import datetime
import uuid

from sqlalchemy import Column, String, TIMESTAMP, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from app.models.base import Base


class Meeting(Base):
    __tablename__ = "meeting"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    room_name = Column(String(255), nullable=False)
    s_date = Column(TIMESTAMP, nullable=False)
    e_date = Column(TIMESTAMP)
    created_by = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow)

    creator = relationship("User", back_populates="meetings")
    participants = relationship("Participant", back_populates="meeting", cascade="all, delete-orphan")
