# projectflow/models/availability.py
from __future__ import annotations

from datetime import datetime, time
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, SmallInteger, Time, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from projectflow.models.base import Base


class AvailabilityWindow(Base):
    __tablename__ = "user_availability"
    __table_args__ = (
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_avail_day_range"),
        CheckConstraint("start_time < end_time", name="ck_avail_times_ordered"),
        Index("ix_avail_person_day_start", "person_id", "day_of_week", "start_time"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    person_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("people.id", ondelete="CASCADE"),
        nullable=False,
    )

    # 0 = Sunday, 1 = Monday, ... 6 = Saturday
    day_of_week: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
