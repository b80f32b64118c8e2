from sqlalchemy.orm import DeclarativeBase

class Base(DeclarativeBase):
    """Base class for all database models"""
    pass

# Import all models here for Alembic autogenerate
from models.subscriber import Subscriber
from models.job import Job

__all__ = ["Base", "Subscriber", "Job"]
