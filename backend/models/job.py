import uuid
from datetime import datetime, timezone
from sqlalchemy import BigInteger, Text, DateTime, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from models import Base


class Job(Base):
    """
    Model for job postings held in the internal store.

    Searched by salary floor, exact title and exact country.
    """
    __tablename__ = "jobs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    title: Mapped[str] = mapped_column(Text, nullable=False)
    country: Mapped[str] = mapped_column(Text, nullable=False)
    salary_min: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    posted_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (
        Index('ix_jobs_title_country', 'title', 'country'),
    )

    def __repr__(self) -> str:
        return f"<Job(id={self.id}, title='{self.title}', country='{self.country}', salary_min={self.salary_min})>"
