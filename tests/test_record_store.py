from concurrent.futures import ThreadPoolExecutor

import pytest

from leadintake.core.database import Base, build_engine, build_session_factory, init_db
from leadintake.core.exceptions import StorageError
from leadintake.models.intake import IntakeStatusEnum, WaitlistEntry
from leadintake.services.record_store import RecordStore


def _entry(n: int) -> dict:
    return {"name": f"Person {n}", "email": f"p{n}@example.com", "city": "Accra"}


def test_insert_assigns_increasing_ids(waitlist_store):
    ids = [waitlist_store.insert(_entry(n)) for n in range(3)]
    assert ids == sorted(ids)
    assert len(set(ids)) == 3


def test_new_rows_are_pending_with_timestamp(waitlist_store):
    record_id = waitlist_store.insert(_entry(1))
    row = waitlist_store.get(record_id)
    assert row.status == IntakeStatusEnum.PENDING
    assert row.created_at is not None


def test_list_is_newest_first_and_bounded(waitlist_store):
    ids = [waitlist_store.insert(_entry(n)) for n in range(5)]
    rows = waitlist_store.list(limit=2)
    assert [r.id for r in rows] == [ids[4], ids[3]]


def test_list_caps_at_max_limit(session_factory):
    store = RecordStore(session_factory, WaitlistEntry, max_limit=3)
    for n in range(5):
        store.insert(_entry(n))
    assert len(store.list()) == 3
    assert len(store.list(limit=100)) == 3
    assert store.list(limit=0) == []


def test_set_status_counts_matched_rows(waitlist_store):
    record_id = waitlist_store.insert(_entry(1))
    assert waitlist_store.set_status(record_id, IntakeStatusEnum.ACCEPTED) == 1
    assert waitlist_store.set_status(record_id, IntakeStatusEnum.ACCEPTED) == 1
    assert waitlist_store.get(record_id).status == IntakeStatusEnum.ACCEPTED
    assert waitlist_store.set_status(record_id + 100, IntakeStatusEnum.REJECTED) == 0


def test_delete_is_permanent(waitlist_store):
    record_id = waitlist_store.insert(_entry(1))
    assert waitlist_store.delete(record_id) == 1
    assert waitlist_store.delete(record_id) == 0
    assert waitlist_store.get(record_id) is None
    assert waitlist_store.set_status(record_id, IntakeStatusEnum.ACCEPTED) == 0


def test_ids_are_never_reused_after_delete(waitlist_store):
    first = waitlist_store.insert(_entry(1))
    second = waitlist_store.insert(_entry(2))
    waitlist_store.delete(second)
    third = waitlist_store.insert(_entry(3))
    assert third > second > first


def test_tables_are_independent(waitlist_store, courier_store):
    waitlist_store.insert(_entry(1))
    courier_store.insert({"name": "Kofi", "email": "kofi@example.com", "route": "Accra-Kumasi"})
    assert len(waitlist_store.list()) == 1
    assert len(courier_store.list()) == 1


def test_io_failure_becomes_storage_error(session_factory, waitlist_store):
    Base.metadata.drop_all(bind=session_factory.kw["bind"])
    with pytest.raises(StorageError) as exc_info:
        waitlist_store.insert(_entry(1))
    assert exc_info.value.message == "Database error"


@pytest.mark.parametrize("record_id", [2 ** 63, 10 ** 30, 0, -1])
def test_out_of_range_ids_match_nothing(waitlist_store, record_id):
    waitlist_store.insert(_entry(1))
    assert waitlist_store.get(record_id) is None
    assert waitlist_store.set_status(record_id, IntakeStatusEnum.ACCEPTED) == 0
    assert waitlist_store.delete(record_id) == 0
    assert len(waitlist_store.list()) == 1


def test_concurrent_inserts_get_distinct_ids(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'intake.db'}")
    init_db(engine)
    store = RecordStore(build_session_factory(engine), WaitlistEntry)
    try:
        with ThreadPoolExecutor(max_workers=8) as pool:
            ids = list(pool.map(lambda n: store.insert(_entry(n)), range(40)))
        assert len(set(ids)) == 40
        assert all(record_id > 0 for record_id in ids)
        assert len(store.list()) == 40
    finally:
        engine.dispose()
