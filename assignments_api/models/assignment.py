import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from assignments_api.db.base_class import Base


class Assignment(Base):
    __tablename__ = "assignments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # set once at creation, never reassigned
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    points = Column(Integer, nullable=False)
    num_of_attempts = Column(Integer, nullable=False)
    deadline = Column(DateTime(timezone=True), nullable=False)

    assignment_created = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    assignment_updated = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("points BETWEEN 1 AND 10", name="ck_assignments_points_range"),
        CheckConstraint("num_of_attempts BETWEEN 1 AND 100", name="ck_assignments_attempts_range"),
    )

    owner = relationship("User", back_populates="assignments")

    submissions = relationship("Submission", back_populates="assignment")
