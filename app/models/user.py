from datetime import datetime
import uuid

from sqlalchemy import Column, String, Boolean, TIMESTAMP, Uuid
from sqlalchemy.orm import relationship

from app.models.base import Base  # Base는 declarative_base()로 정의된 객체입니다.


class UserRole:
    STUDENT = "STUDENT"
    ADMIN = "ADMIN"


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    # STUDENT, ADMIN 외의 값도 허용
    role = Column(String(50), nullable=False, default=UserRole.STUDENT)
    profile_image_url = Column(String(500))
    is_verified = Column(Boolean, nullable=False, default=False)
    verification_code = Column(String(20))
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow)

    # 관계 정의
    meetings = relationship("Meeting", back_populates="creator", cascade="all, delete-orphan")
    participations = relationship("Participant", back_populates="user", cascade="all, delete-orphan")
