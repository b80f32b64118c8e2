import uuid
from datetime import datetime, timezone
from sqlalchemy import BigInteger, String, Text, DateTime, JSON, Uuid
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column
from models import Base

# text[] on PostgreSQL; JSON elsewhere so the schema can be created on SQLite in tests
StringList = ARRAY(Text).with_variant(JSON(), "sqlite")


class Subscriber(Base):
    """
    Subscriber model for stored job-search preferences.

    - Upserted by email through POST /V1/subscribe
    - job_titles / preferred_countries are the defaults used when a
      jobs search does not supply them explicitly
    """
    __tablename__ = "subscribers"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4
    )

    user_name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Upsert key
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True
    )

    job_titles: Mapped[list[str]] = mapped_column(StringList, nullable=True)
    preferred_countries: Mapped[list[str]] = mapped_column(StringList, nullable=True)
    salary_min: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

    def __repr__(self) -> str:
        return f"<Subscriber(id={self.id}, email='{self.email}', user_name='{self.user_name}')>"
