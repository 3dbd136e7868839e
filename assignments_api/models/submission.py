import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import relationship

from assignments_api.db.base_class import Base


class Submission(Base):
    __tablename__ = "submissions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    assignment_id = Column(String(36), ForeignKey("assignments.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    submission_url = Column(Text, nullable=False)

    # accepted attempts so far, never above the assignment's num_of_attempts
    attempts = Column(Integer, nullable=False, default=1)

    submission_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    submission_updated = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("assignment_id", "user_id", name="uq_submission_assignment_user"),
        CheckConstraint("attempts >= 1", name="ck_submissions_attempts_positive"),
    )

    assignment = relationship("Assignment", back_populates="submissions")
    user = relationship("User", back_populates="submissions")
