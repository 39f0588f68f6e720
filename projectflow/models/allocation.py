# projectflow/models/allocation.py
from __future__ import annotations

from datetime import date, datetime
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Index, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from projectflow.models.base import Base
from projectflow.models.directory import Person, Project


class Allocation(Base):
    __tablename__ = "resource_allocations"
    __table_args__ = (
        CheckConstraint("percentage BETWEEN 1 AND 100", name="ck_alloc_percentage_range"),
        CheckConstraint("end_date IS NULL OR start_date <= end_date", name="ck_alloc_dates_ordered"),
        Index("ix_alloc_person_start", "person_id", "start_date"),
        Index("ix_alloc_project", "project_id"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    person_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("people.id", ondelete="CASCADE"),
        nullable=False,
    )
    project_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    # NULL = allocated to the project as a whole
    task_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("tasks.id", ondelete="CASCADE"),
        nullable=True,
    )

    percentage: Mapped[int] = mapped_column(Integer, nullable=False)

    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    # NULL = open-ended
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # labels for read models
    person: Mapped[Person] = relationship(Person, lazy="joined", viewonly=True)
    project: Mapped[Project] = relationship(Project, lazy="joined", viewonly=True)
