"""GeocodeCacheEntry model — caches raw upstream responses keyed by address."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from geocode_cache.models.base import Base


class GeocodeCacheEntry(Base):
    """Cached upstream response keyed by the address as received."""

    __tablename__ = "geocode_cache"

    address: Mapped[str] = mapped_column(String, primary_key=True)
    response: Mapped[str] = mapped_column(Text, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    cached_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
