from sqlalchemy import Column, String, DateTime, ForeignKey, Uuid
from db.database import Base
from core.timeutils import utcnow
import uuid


class Task(Base):
    __tablename__ = "tasks"

    task_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(100), nullable=False, index=True)
    description = Column(String(500))
    status = Column(String, nullable=False, index=True)  # TaskStatus value
    due_date = Column(DateTime, nullable=False, index=True)
    completed_at = Column(DateTime, index=True)
    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
