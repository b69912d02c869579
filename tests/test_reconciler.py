import asyncio
import time

from app.services.reconciler import LoadOutcome
from app.services.records import VolunteerPayload


def _payload(name="Ravi Kumar", code="AAK0002"):
    return VolunteerPayload(name=name, aakNo=code, mobileNo="9800000002", address="Delhi, NCR")


def test_load_from_remote_overwrites_cache(reconciler, fake_client, store, make_record):
    store.write([make_record("stale", name="Old Entry")])
    fake_client.records = [make_record("r1", name="Asha", code="AAK0001")]

    outcome = asyncio.run(reconciler.load())

    assert outcome == LoadOutcome.FROM_REMOTE
    assert [r.id for r in reconciler.records] == ["r1"]
    assert store.read() == reconciler.records
    assert reconciler.state.last_outcome == LoadOutcome.FROM_REMOTE
    assert reconciler.state.loading is False


def test_load_falls_back_to_cache_exactly(reconciler, fake_client, store, make_record):
    cached = [make_record("c2", name="Bina"), make_record("c1", name="Arun")]
    store.write(cached)
    fake_client.list_ok = False

    outcome = asyncio.run(reconciler.load())

    assert outcome == LoadOutcome.FROM_CACHE
    assert reconciler.records == cached


def test_load_seeds_when_remote_and_cache_fail(reconciler, fake_client, store):
    fake_client.list_ok = False

    outcome = asyncio.run(reconciler.load())

    assert outcome == LoadOutcome.SEEDED
    assert [r.id for r in reconciler.records] == [f"mock_{i}" for i in range(1, 9)]
    assert [r.membership_code for r in reconciler.records] == [f"AAK{1000 + i}" for i in range(1, 9)]
    assert store.read() == reconciler.records


def test_load_is_not_reentered_while_running(reconciler, fake_client, make_record):
    fake_client.records = [make_record("r1")]
    reconciler.state.loading = True

    assert asyncio.run(reconciler.load()) is None
    assert reconciler.records == []


def test_remote_empty_list_is_authoritative(reconciler, fake_client, store, make_record):
    store.write([make_record("c1")])
    fake_client.records = []

    assert asyncio.run(reconciler.load()) == LoadOutcome.FROM_REMOTE
    assert reconciler.records == []
    assert store.read() == []


def test_create_success_prepends_server_record_and_selects_it(reconciler, store, make_record):
    reconciler.state.records = [make_record("r1")]
    reconciler.state.selected = reconciler.records[0]

    result = asyncio.run(reconciler.create(_payload()))

    assert result.ok
    assert result.record.id == "srv_1"
    assert [r.id for r in reconciler.records] == ["srv_1", "r1"]
    assert reconciler.selected == result.record
    assert store.read() == reconciler.records


def test_create_failure_leaves_state_alone(reconciler, fake_client, store, make_record):
    fake_client.create_ok = False
    reconciler.state.records = [make_record("r1")]

    result = asyncio.run(reconciler.create(_payload()))

    assert not result.ok
    assert result.error
    assert [r.id for r in reconciler.records] == ["r1"]
    assert store.read() == []


def test_local_fallback_record_is_prepended_persisted_and_selected(reconciler, fake_client, store, make_record):
    fake_client.create_ok = False
    previous = [make_record("r1"), make_record("r2")]
    reconciler.state.records = list(previous)

    result = asyncio.run(reconciler.create(_payload()))
    assert not result.ok

    local = make_record("local_1", name="Ravi")
    reconciler.add_local(local)

    assert reconciler.records == [local] + previous
    assert store.read() == reconciler.records
    assert reconciler.selected.id == "local_1"


def test_delete_removes_exactly_one_and_persists(reconciler, fake_client, store, make_record):
    reconciler.state.records = [make_record("r1"), make_record("r2"), make_record("r3")]

    result = asyncio.run(reconciler.delete("r2"))

    assert result.remote_ok and result.removed
    assert [r.id for r in reconciler.records] == ["r1", "r3"]
    assert fake_client.deleted == ["r2"]
    assert store.read() == reconciler.records


def test_delete_proceeds_locally_when_remote_fails(reconciler, fake_client, store, make_record):
    fake_client.delete_ok = False
    reconciler.state.records = [make_record("r1"), make_record("r2")]

    result = asyncio.run(reconciler.delete("r1"))

    assert not result.remote_ok
    assert result.removed
    assert [r.id for r in reconciler.records] == ["r2"]
    assert store.read() == reconciler.records


def test_delete_unknown_id_leaves_list_unchanged(reconciler, make_record):
    records = [make_record("r1"), make_record("r2")]
    reconciler.state.records = list(records)

    result = asyncio.run(reconciler.delete("missing"))

    assert not result.removed
    assert reconciler.records == records


def test_delete_clears_selection_of_deleted_record(reconciler, make_record):
    reconciler.state.records = [make_record("r1"), make_record("r2")]
    reconciler.select("r1")

    asyncio.run(reconciler.delete("r1"))

    assert reconciler.selected is None


def test_delete_keeps_unrelated_selection(reconciler, make_record):
    reconciler.state.records = [make_record("r1"), make_record("r2")]
    reconciler.select("r2")

    asyncio.run(reconciler.delete("r1"))

    assert reconciler.selected.id == "r2"


def test_select_unknown_id_keeps_current_selection(reconciler, make_record):
    reconciler.state.records = [make_record("r1")]
    reconciler.select("r1")

    assert reconciler.select("missing") is None
    assert reconciler.selected.id == "r1"


def test_next_sequence_number(reconciler, make_record):
    assert reconciler.next_sequence_number() == 1001

    reconciler.state.records = [
        make_record("r1", sequence_number=1004),
        make_record("r2"),
        make_record("r3", sequence_number=1002),
    ]
    assert reconciler.next_sequence_number() == 1005


def test_overlapping_loads_hit_remote_once(reconciler, fake_client, make_record):
    fake_client.records = [make_record("r1")]
    original = fake_client.list_volunteers
    calls = []

    def slow_list():
        calls.append(1)
        time.sleep(0.2)
        return original()

    fake_client.list_volunteers = slow_list

    async def run_both():
        return await asyncio.gather(reconciler.load(), reconciler.load())

    outcomes = asyncio.run(run_both())

    assert sorted(outcomes, key=lambda o: o is None) == [LoadOutcome.FROM_REMOTE, None]
    assert len(calls) == 1
    assert [r.id for r in reconciler.records] == ["r1"]
    assert reconciler.state.loading is False
