import pytest

from core.database import Base
from core.exceptions import WriteError
from models.patient_record import STATUS_SERVED, STATUS_WAITING
from services.patient_service import (
    add_patient,
    claim_waiting,
    count_by_status,
    get_patient,
    load_history,
    load_waiting,
    mark_served,
    search_by_name,
)


def test_add_patient_returns_increasing_ids(db):
    first = add_patient(db, "Anna", 30, 2, "General")
    second = add_patient(db, "Juan", 45, 4, "X-Ray")
    assert second > first


def test_add_patient_defaults(db):
    record_id = add_patient(db, "Anna", 30, 2, "General")
    record = get_patient(db, record_id)
    assert record.status == STATUS_WAITING
    assert record.visit_time
    assert record.checkup == "General"


def test_store_accepts_empty_name(db):
    record_id = add_patient(db, "", 20, 1, "")
    assert get_patient(db, record_id).name == ""


def test_null_name_raises_write_error(db):
    with pytest.raises(WriteError):
        add_patient(db, None, 20, 1, "")
    # session is usable after the failed insert
    assert add_patient(db, "Bob", 20, 1, "") > 0


def test_load_waiting_orders_by_severity_then_arrival(db):
    a = add_patient(db, "A", 30, 3, "")
    b = add_patient(db, "B", 30, 5, "")
    c = add_patient(db, "C", 30, 3, "")
    d = add_patient(db, "D", 30, 5, "")
    e = add_patient(db, "E", 30, 1, "")

    assert [p.id for p in load_waiting(db)] == [b, d, a, c, e]


def test_mark_served_moves_record_to_history_only(db):
    keep = add_patient(db, "Anna", 30, 2, "")
    served = add_patient(db, "Juan", 40, 5, "")

    assert mark_served(db, served) is True

    assert [p.id for p in load_waiting(db)] == [keep]
    history = {p.id: p.status for p in load_history(db)}
    assert history[served] == STATUS_SERVED
    assert history[keep] == STATUS_WAITING


def test_mark_served_unknown_id(db):
    assert mark_served(db, 999) is False


def test_mark_served_twice_is_harmless(db):
    record_id = add_patient(db, "Anna", 30, 2, "")
    assert mark_served(db, record_id) is True
    assert mark_served(db, record_id) is True
    assert get_patient(db, record_id).status == STATUS_SERVED


def test_load_history_limit_most_recent_first(db):
    add_patient(db, "First", 30, 2, "")
    second = add_patient(db, "Second", 30, 2, "")
    third = add_patient(db, "Third", 30, 2, "")

    assert [p.id for p in load_history(db, 2)] == [third, second]


@pytest.mark.parametrize("limit", [0, None])
def test_load_history_without_limit(db, limit):
    for name in ["A", "B", "C"]:
        add_patient(db, name, 30, 2, "")
    assert len(load_history(db, limit)) == 3


def test_search_by_name_case_insensitive(db):
    add_patient(db, "Anna", 30, 2, "")
    add_patient(db, "Juan", 40, 3, "")
    add_patient(db, "Bob", 50, 4, "")

    assert {p.name for p in search_by_name(db, "an")} == {"Anna", "Juan"}
    assert {p.name for p in search_by_name(db, "AN")} == {"Anna", "Juan"}


def test_search_by_name_includes_served(db):
    record_id = add_patient(db, "Anna", 30, 2, "")
    mark_served(db, record_id)
    assert [p.id for p in search_by_name(db, "ann")] == [record_id]


def test_search_by_name_matches_wildcards_literally(db):
    add_patient(db, "100% Sure", 30, 2, "")
    add_patient(db, "Bob_Smith", 30, 2, "")
    add_patient(db, "Bobby", 30, 2, "")

    assert [p.name for p in search_by_name(db, "%")] == ["100% Sure"]
    assert [p.name for p in search_by_name(db, "b_s")] == ["Bob_Smith"]


def test_search_by_name_empty_query_matches_all(db):
    add_patient(db, "Anna", 30, 2, "")
    add_patient(db, "Juan", 40, 3, "")
    assert len(search_by_name(db, "")) == 2


def test_count_by_status(db):
    assert count_by_status(db) == {STATUS_WAITING: 0, STATUS_SERVED: 0}
    record_id = add_patient(db, "Anna", 30, 2, "")
    add_patient(db, "Juan", 40, 3, "")
    mark_served(db, record_id)
    assert count_by_status(db) == {STATUS_WAITING: 1, STATUS_SERVED: 1}


def test_read_errors_return_empty(store, db):
    add_patient(db, "Anna", 30, 2, "")
    db.close()
    Base.metadata.drop_all(bind=store.engine)

    assert load_waiting(db) == []
    assert load_history(db) == []
    assert search_by_name(db, "an") == []
    assert mark_served(db, 1) is False


@pytest.mark.parametrize("query", ["Élodie", "élodie", "ÉLODIE", "lod"])
def test_search_by_name_folds_non_ascii(db, query):
    add_patient(db, "Élodie", 30, 2, "")
    add_patient(db, "Bob", 30, 2, "")
    assert [p.name for p in search_by_name(db, query)] == ["Élodie"]


def test_claim_waiting_only_once(db):
    record_id = add_patient(db, "Anna", 30, 2, "")
    assert claim_waiting(db, record_id) is True
    assert claim_waiting(db, record_id) is False
    assert get_patient(db, record_id).status == STATUS_SERVED


def test_claim_waiting_unknown_id(db):
    assert claim_waiting(db, 999) is False
