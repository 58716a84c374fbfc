"""
Event CRUD and the lifecycle of each event's Cloudinary image.

Every event owns exactly one remote asset. The service keeps the two in
step: a fresh upload is removed again when the record write that should
own it fails, a replaced image is removed once the new record is
committed, and a deleted event takes its image with it.
"""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, UnexpectedError, ValidationError
from app.core.logging_config import get_logger
from app.models.event import Event
from app.schemas.event import EventCreate, EventFilters, EventUpdate
from app.utils.cloudinary_utils import AssetStore, StoredAsset
from app.utils.image_utils import ImageUpload

logger = get_logger("event")


class EventService:

    def __init__(self, db: Session, storage: AssetStore):
        self.db = db
        self.storage = storage

    # =====================================================================
    # READ
    # =====================================================================
    def list(self, filters: EventFilters | None = None) -> list[Event]:
        filters = filters or EventFilters()

        query = self.db.query(Event).filter(Event.is_active == filters.is_active)

        if filters.category and filters.category != "all":
            query = query.filter(Event.category == filters.category)

        if filters.featured is not None:
            query = query.filter(Event.featured == filters.featured)

        return (
            query
            .order_by(Event.order.desc(), Event.created_at.desc(), Event.id.desc())
            .all()
        )

    def get(self, event_id: int) -> Event:
        event = self.db.get(Event, event_id)
        if not event:
            raise NotFoundError("Event not found")
        return event

    # =====================================================================
    # CREATE
    # =====================================================================
    def create(self, data: EventCreate, image: ImageUpload | None) -> Event:
        if image is None:
            raise ValidationError("Please upload an image")

        # StorageError propagates before anything touches the database
        asset = self.storage.upload(image.content, image.filename)

        event = Event(
            title=data.title,
            description=data.description,
            category=data.category,
            date=data.date,
            featured=data.featured,
            order=data.order,
            is_active=True,
            image_url=asset.url,
            image_public_id=asset.public_id,
        )

        try:
            self.db.add(event)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            self._discard_asset(asset, reason="event create failed")
            raise UnexpectedError(f"Failed to create event: {e}")

        self.db.refresh(event)
        logger.info(f"Event created: id={event.id} image={asset.public_id}")
        return event

    # =====================================================================
    # UPDATE
    # =====================================================================
    def update(self, event_id: int, data: EventUpdate, image: ImageUpload | None = None) -> Event:
        event = self.get(event_id)

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        old_public_id = event.image_public_id
        new_asset = None

        if image is not None:
            new_asset = self.storage.upload(image.content, image.filename)
            changes["image_url"] = new_asset.url
            changes["image_public_id"] = new_asset.public_id

        for field, value in changes.items():
            setattr(event, field, value)

        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            if new_asset is not None:
                self._discard_asset(new_asset, reason=f"event {event_id} update failed")
            raise UnexpectedError(f"Failed to update event: {e}")

        self.db.refresh(event)

        # old image only goes once the record points at the new one
        if new_asset is not None and old_public_id != new_asset.public_id:
            if not self.storage.delete(old_public_id):
                logger.warning(f"Replaced image {old_public_id} of event {event.id} could not be deleted")

        logger.info(f"Event updated: id={event.id} fields={sorted(changes)}")
        return event

    # =====================================================================
    # DELETE
    # =====================================================================
    def delete(self, event_id: int) -> None:
        event = self.get(event_id)

        if not self.storage.delete(event.image_public_id):
            logger.warning(f"Image {event.image_public_id} of event {event.id} could not be deleted")

        try:
            self.db.delete(event)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise UnexpectedError(f"Failed to delete event: {e}")

        logger.info(f"Event deleted: id={event_id}")

    # =====================================================================
    # TOGGLE ACTIVE
    # =====================================================================
    def toggle_active(self, event_id: int) -> Event:
        event = self.get(event_id)
        event.is_active = not event.is_active

        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise UnexpectedError(f"Failed to toggle event status: {e}")

        self.db.refresh(event)
        logger.info(f"Event {event.id} is_active={event.is_active}")
        return event

    def _discard_asset(self, asset: StoredAsset, reason: str):
        """Compensating delete. Failures are logged so the original error wins."""
        try:
            deleted = self.storage.delete(asset.public_id)
        except Exception as e:
            logger.error(f"Orphaned image {asset.public_id} ({reason}): {e}")
            return
        if not deleted:
            logger.error(f"Orphaned image {asset.public_id} ({reason})")
