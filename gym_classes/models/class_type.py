# gym_classes/models/class_type.py
import uuid
from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String, Text, func, text
from gym_classes.db.base_class import Base


class ClassType(Base):
    """
    A bookable modality (spinning, yoga, functional...).

    max_capacity is only the default copied into schedules and sessions;
    changing it never resizes sessions that already exist.
    """
    __tablename__ = "class_types"

    id = Column(String, primary_key=True, default=lambda: f"cty_{uuid.uuid4().hex[:12]}")
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    duration_minutes = Column(Integer, nullable=False, server_default="60")
    max_capacity = Column(Integer, nullable=False, server_default="20")
    color = Column(String(20), nullable=False, server_default="#3b82f6")
    is_active = Column(Boolean, nullable=False, server_default=text("true"))

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("duration_minutes > 0", name="check_class_type_duration_positive"),
        CheckConstraint("max_capacity > 0", name="check_class_type_capacity_positive"),
    )
