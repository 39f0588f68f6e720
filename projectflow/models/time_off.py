# projectflow/models/time_off.py
from __future__ import annotations

import enum
from datetime import date, datetime
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, foreign, mapped_column, relationship

from projectflow.models.base import Base
from projectflow.models.directory import Person


class TimeOffStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class TimeOffType(str, enum.Enum):
    vacation = "vacation"
    sick = "sick"
    personal = "personal"
    remote = "remote"
    other = "other"


class TimeOffRequest(Base):
    __tablename__ = "time_off_requests"
    __table_args__ = (
        CheckConstraint("start_date <= end_date", name="ck_timeoff_dates_ordered"),
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="ck_timeoff_status_domain",
        ),
        # approval stamps exist exactly when the request is approved
        CheckConstraint(
            "(status = 'approved') = (approved_by IS NOT NULL AND approved_at IS NOT NULL)",
            name="ck_timeoff_approval_fields",
        ),
        Index("ix_timeoff_person_start", "person_id", "start_date"),
        Index("ix_timeoff_status", "status"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    person_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("people.id", ondelete="CASCADE"),
        nullable=False,
    )

    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)

    # stored as text, values from TimeOffStatus / TimeOffType
    status: Mapped[str] = mapped_column(String, nullable=False, default=TimeOffStatus.pending.value)
    request_type: Mapped[str] = mapped_column(String, nullable=False)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # no FK: the stamp outlives the approver's directory row
    approved_by: Mapped[UUID | None] = mapped_column(Uuid, nullable=True)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # labels for read models
    person: Mapped[Person] = relationship(Person, lazy="joined", viewonly=True)
    approver: Mapped[Person | None] = relationship(
        Person,
        primaryjoin=lambda: foreign(TimeOffRequest.approved_by) == Person.id,
        lazy="joined",
        viewonly=True,
    )
