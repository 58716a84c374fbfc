"""Tests for event CRUD and image lifecycle."""

from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError

from app.core.exceptions import NotFoundError, StorageError, UnexpectedError, ValidationError
from app.models.event import Event
from app.schemas.event import EventCreate, EventFilters, EventUpdate
from app.services.event_service import EventService
from app.utils.image_utils import ImageUpload


@pytest.fixture
def service(db_session, asset_store) -> EventService:
    return EventService(db_session, asset_store)


@pytest.fixture
def event_data() -> EventCreate:
    return EventCreate(
        title="Free health camp",
        description="Blood pressure and sugar checks",
        category="health",
        date=datetime(2026, 11, 2, 9, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def image(jpeg_bytes) -> ImageUpload:
    return ImageUpload(content=jpeg_bytes, filename="camp.jpg")


def fail_commit(*args, **kwargs):
    raise OperationalError("INSERT", {}, Exception("database is locked"))


def test_create_event(service, asset_store, event_data, image):
    event = service.create(event_data, image)

    assert event.id is not None
    assert event.is_active is True
    assert event.featured is False
    assert event.order == 0
    assert asset_store.uploads == [event.image_public_id]
    assert event.image_url.endswith(f"{event.image_public_id}.jpg")


def test_create_without_image(service, asset_store, db_session, event_data):
    with pytest.raises(ValidationError) as exc:
        service.create(event_data, None)

    assert exc.value.message == "Please upload an image"
    assert asset_store.uploads == []
    assert asset_store.deleted == []
    assert db_session.query(Event).count() == 0


def test_create_upload_failure_writes_nothing(service, asset_store, db_session, event_data, image):
    asset_store.fail_upload = True

    with pytest.raises(StorageError):
        service.create(event_data, image)
    assert db_session.query(Event).count() == 0


def test_create_write_failure_removes_upload(service, asset_store, db_session, event_data, image, monkeypatch):
    monkeypatch.setattr(db_session, "commit", fail_commit)

    with pytest.raises(UnexpectedError):
        service.create(event_data, image)

    assert len(asset_store.uploads) == 1
    assert asset_store.deleted == asset_store.uploads
    assert db_session.query(Event).count() == 0


def test_create_write_failure_survives_failed_cleanup(service, asset_store, db_session, event_data, image, monkeypatch):
    monkeypatch.setattr(db_session, "commit", fail_commit)
    asset_store.fail_delete = True

    with pytest.raises(UnexpectedError):
        service.create(event_data, image)
    assert asset_store.deleted == asset_store.uploads


def test_update_fields_only(service, asset_store, make_event):
    event = make_event()

    updated = service.update(event.id, EventUpdate(title="Renamed", featured=True, order=5))

    assert updated.title == "Renamed"
    assert updated.featured is True
    assert updated.order == 5
    assert updated.description == event.description
    assert asset_store.uploads == []
    assert asset_store.deleted == []


def test_update_replaces_image(service, asset_store, make_event, image):
    event = make_event()
    old_public_id = event.image_public_id

    updated = service.update(event.id, EventUpdate(), image)

    assert asset_store.deleted == [old_public_id]
    assert updated.image_public_id == asset_store.uploads[0]
    assert updated.image_url.endswith(f"{asset_store.uploads[0]}.jpg")


def test_update_write_failure_keeps_old_image(service, asset_store, db_session, make_event, image, monkeypatch):
    event = make_event()
    old_public_id = event.image_public_id
    monkeypatch.setattr(db_session, "commit", fail_commit)

    with pytest.raises(UnexpectedError):
        service.update(event.id, EventUpdate(title="Renamed"), image)

    # only the new upload is rolled back, the old asset stays live
    assert asset_store.deleted == asset_store.uploads
    assert old_public_id not in asset_store.deleted
    monkeypatch.undo()
    db_session.expire_all()
    assert db_session.get(Event, event.id).image_public_id == old_public_id


def test_update_missing_event(service, asset_store, image):
    with pytest.raises(NotFoundError):
        service.update(404, EventUpdate(title="Nope"), image)
    assert asset_store.uploads == []


def test_delete_event(service, asset_store, db_session, make_event):
    event = make_event()
    event_id, public_id = event.id, event.image_public_id

    service.delete(event_id)

    assert asset_store.deleted == [public_id]
    assert db_session.get(Event, event_id) is None


def test_delete_missing_event(service, asset_store):
    with pytest.raises(NotFoundError):
        service.delete(12345)
    assert asset_store.deleted == []


def test_toggle_active_twice(service, make_event):
    event = make_event(is_active=True)

    assert service.toggle_active(event.id).is_active is False
    assert service.toggle_active(event.id).is_active is True


def test_toggle_missing_event(service):
    with pytest.raises(NotFoundError):
        service.toggle_active(77)


def test_list_defaults_to_active_sorted(service, make_event):
    low = make_event(order=1)
    high_old = make_event(order=5)
    high_new = make_event(order=5)
    make_event(order=9, is_active=False)

    results = service.list()

    assert [e.id for e in results] == [high_new.id, high_old.id, low.id]


def test_list_breaks_order_ties_by_creation_time(service, make_event):
    newer = make_event(order=5, created_at=datetime(2026, 3, 1, tzinfo=timezone.utc))
    # inserted later, so higher id, but created earlier
    older = make_event(order=5, created_at=datetime(2025, 12, 1, tzinfo=timezone.utc))

    results = service.list()

    assert older.id > newer.id
    assert [e.id for e in results] == [newer.id, older.id]


def test_list_inactive_only(service, make_event):
    make_event()
    inactive = make_event(is_active=False)

    results = service.list(EventFilters(is_active=False))

    assert [e.id for e in results] == [inactive.id]


def test_list_by_category_and_featured(service, make_event):
    wanted = make_event(category="camp", featured=True)
    make_event(category="camp", featured=False)
    make_event(category="offer", featured=True)

    assert [e.id for e in service.list(EventFilters(category="camp", featured=True))] == [wanted.id]
    assert len(service.list(EventFilters(category="all"))) == 3
