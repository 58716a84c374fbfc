from sqlalchemy import Column, Integer, String, Boolean, DateTime

from app.db.session import Base, utcnow


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)

    title = Column(String(100), nullable=False)
    description = Column(String(500), nullable=False)
    category = Column(String(50), nullable=False, index=True)
    date = Column(DateTime(timezone=True), nullable=False)

    featured = Column(Boolean, default=False, nullable=False)
    order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    # Cloudinary asset owned by this event
    image_url = Column(String, nullable=False)
    image_public_id = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
