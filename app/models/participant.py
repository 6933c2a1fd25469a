import uuid

from sqlalchemy import Column, String, TIMESTAMP, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from .base import Base


class Participant(Base):
    __tablename__ = "participant"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    meeting_id = Column(Uuid, ForeignKey("meeting.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(String(50), nullable=False)
    joined_at = Column(TIMESTAMP)
    left_at = Column(TIMESTAMP)

    meeting = relationship("Meeting", back_populates="participants")
    user = relationship("User", back_populates="participations")
