"""File model definitions."""

from sqlalchemy import Column, DateTime, Integer, String, func

from booking.core import config
from booking.database import Base


class File(Base):
    """An uploaded file, used as a user avatar."""
    __tablename__ = "files"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    path = Column(String, nullable=False, unique=True)
    created_at = Column(DateTime, server_default=func.now())

    @property
    def url(self) -> str:
        return f"{config.APP_URL}/files/{self.path}"
