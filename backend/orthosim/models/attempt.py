"""Surgery simulation attempt model."""

import uuid

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship

from orthosim.db.base import Base, utcnow


class SurgeryAttempt(Base):
    """One recorded VR intramedullary-nailing run.

    ``score`` is stored the way the simulator reports it ("82%"); parsing and
    validation happen in ``orthosim.performance.aggregator``.
    """

    __tablename__ = "surgery_attempts"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    trainee_profile_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("trainee_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    attempt_date = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    total_time = Column(Integer, default=0, nullable=False)  # seconds
    score = Column(String(16), nullable=False)
    is_completed = Column(Boolean, default=False, nullable=False)
    xray_image_path = Column(String, nullable=True)

    # Reduction stage
    reduction_duration = Column(Integer, nullable=True)
    reduction_needed_bone_length = Column(Float, nullable=True)
    reduction_actual_bone_length = Column(Float, nullable=True)
    reduction_accuracy = Column(Float, nullable=True)

    # Entry site stage
    entry_site_duration = Column(Integer, nullable=True)
    cutting_accuracy = Column(Float, nullable=True)
    needed_thandle_depth = Column(Float, nullable=True)
    actual_thandle_depth = Column(Float, nullable=True)
    thandle_accuracy = Column(Float, nullable=True)

    # Nail insertion stage
    nail_insertion_duration = Column(Integer, nullable=True)
    needed_wire_depth = Column(Float, nullable=True)
    actual_wire_depth = Column(Float, nullable=True)
    wire_position_accuracy = Column(Float, nullable=True)
    needed_nail_depth = Column(Float, nullable=True)
    actual_nail_depth = Column(Float, nullable=True)
    nail_position_accuracy = Column(Float, nullable=True)

    # Locking and closure stage
    locking_closure_duration = Column(Integer, nullable=True)
    steps_accuracy = Column(Float, nullable=True)
    step_tool_accuracy = Column(Float, nullable=True)
    first_proximal_screw_accuracy = Column(Float, nullable=True)
    second_proximal_screw_accuracy = Column(Float, nullable=True)
    distal_screw_accuracy = Column(Float, nullable=True)

    tool_usage_order = Column(JSON, nullable=True)
    nail_locking_steps = Column(JSON, nullable=True)
    performance_detail = Column(JSON, nullable=True)

    trainee_profile = relationship("TraineeProfile", back_populates="surgery_attempts")
    feedbacks = relationship(
        "Feedback",
        back_populates="surgery_attempt",
        cascade="all, delete-orphan",
        order_by="Feedback.created_at.desc()",
    )
