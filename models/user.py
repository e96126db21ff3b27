from sqlalchemy import Column, String, DateTime, Uuid
from db.database import Base
from core.timeutils import utcnow
import uuid


class User(Base):
    __tablename__ = "users"

    user_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(50), nullable=False)
    nickname = Column(String(50), nullable=False, unique=True)
    email = Column(String(50), nullable=False, unique=True)
    # hashes, never serialized
    password = Column(String, nullable=False)
    security_answer = Column(String, nullable=False)
    status = Column(String, nullable=False)  # UserStatus value
    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
