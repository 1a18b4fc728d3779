import threading
from itertools import permutations

import pytest

from facet_summary.contracts import FacetResult, FacetValue
from facet_summary.exceptions import SummaryClosedError
from facet_summary.state import PartialResultStore, RoundToken

R1 = RoundToken(generation=1, nonce="a")
R2 = RoundToken(generation=2, nonce="b")


def _result(key: str, **counts: int) -> FacetResult:
    return FacetResult(
        key=key,
        top_values=[FacetValue(value=value, count=count) for value, count in counts.items()],
    )


def test_reset_clears_entries_and_total() -> None:
    store = PartialResultStore()
    store.reset(R1)
    store.merge_facet(R1, "browser", _result("browser", chrome=10))
    store.merge_total(R1, 20)

    store.reset(R2)
    snapshot = store.snapshot()

    assert snapshot.round == R2
    assert dict(snapshot.facets) == {}
    assert snapshot.total is None


def test_stale_merges_leave_state_unchanged() -> None:
    store = PartialResultStore()
    store.reset(R1)
    store.merge_facet(R1, "browser", _result("browser", chrome=10))
    store.reset(R2)
    store.merge_total(R2, 7)
    before = store.snapshot()

    assert store.merge_facet(R1, "os", _result("os", linux=3)) is False
    assert store.merge_total(R1, 99) is False

    after = store.snapshot()
    assert after.round == before.round
    assert dict(after.facets) == dict(before.facets)
    assert after.total == before.total


def test_merge_order_does_not_change_final_state() -> None:
    writes = [
        ("facet", "browser", _result("browser", chrome=10, firefox=5)),
        ("facet", "os", _result("os", linux=8)),
        ("facet", "device", _result("device", desktop=12)),
        ("total", None, 15),
    ]
    states = []

    for order in permutations(writes):
        store = PartialResultStore()
        store.reset(R1)
        for kind, facet, value in order:
            if kind == "facet":
                store.merge_facet(R1, facet, value)
            else:
                store.merge_total(R1, value)
        snapshot = store.snapshot()
        states.append((dict(snapshot.facets), snapshot.total))

    assert all(state == states[0] for state in states)


def test_loading_until_facet_and_total_present() -> None:
    store = PartialResultStore()
    store.reset(R1)
    store.merge_facet(R1, "browser", _result("browser", chrome=10))

    assert store.snapshot().is_loading("browser") is True

    store.merge_total(R1, 10)

    assert store.snapshot().is_loading("browser") is False
    assert store.snapshot().is_loading("os") is True


def test_snapshot_is_read_only_and_detached() -> None:
    store = PartialResultStore()
    store.reset(R1)
    snapshot = store.snapshot()
    store.merge_facet(R1, "browser", _result("browser", chrome=1))

    assert "browser" not in snapshot.facets
    with pytest.raises(TypeError):
        snapshot.facets["os"] = _result("os", linux=1)


def test_listeners_receive_snapshot_after_every_mutation() -> None:
    store = PartialResultStore()
    seen = []
    unsubscribe = store.subscribe(lambda snapshot: seen.append((snapshot.round, snapshot.total)))

    store.reset(R1)
    store.merge_total(R1, 4)
    store.merge_total(R2, 5)
    unsubscribe()
    store.merge_total(R1, 6)

    assert seen == [(R1, None), (R1, 4)]


def test_failing_listener_is_reported_and_others_still_run() -> None:
    errors = []
    store = PartialResultStore(on_listener_error=errors.append)
    seen = []

    def broken(_snapshot) -> None:
        raise RuntimeError("render failed")

    store.subscribe(broken)
    store.subscribe(lambda snapshot: seen.append(snapshot.round))
    store.reset(R1)

    assert seen == [R1]
    assert len(errors) == 1
    assert str(errors[0]) == "render failed"


def test_discarded_store_rejects_reset_and_ignores_merges() -> None:
    store = PartialResultStore()
    store.reset(R1)
    store.discard()

    assert store.merge_total(R1, 3) is False
    assert store.snapshot().round is None
    with pytest.raises(SummaryClosedError):
        store.reset(R2)


def test_listener_resetting_inside_callback_never_receives_older_round_afterwards() -> None:
    store = PartialResultStore()
    seen = []

    def restart(snapshot) -> None:
        if snapshot.round == R1 and snapshot.total is not None:
            store.reset(R2)

    store.subscribe(restart)
    store.subscribe(lambda snapshot: seen.append((snapshot.round.generation, snapshot.total)))

    store.reset(R1)
    store.merge_total(R1, 99)

    assert seen == [(1, None), (2, None)]
    assert store.snapshot().round == R2


def test_snapshots_carry_increasing_sequence() -> None:
    store = PartialResultStore()
    store.reset(R1)
    first = store.snapshot()
    store.merge_total(R1, 3)
    store.merge_total(R2, 4)

    assert store.snapshot().sequence == first.sequence + 1


def test_concurrent_resets_and_merges_keep_snapshots_consistent() -> None:
    errors = []
    delivered = []
    store = PartialResultStore(on_listener_error=errors.append)
    stop = threading.Event()

    def check(snapshot) -> None:
        if snapshot.round is None:
            return
        expected = f"r{snapshot.round.generation}"
        for result in snapshot.facets.values():
            assert [item.value for item in result.top_values] == [expected]
        assert snapshot.total in (None, snapshot.round.generation)

    def record(snapshot) -> None:
        check(snapshot)
        delivered.append((snapshot.sequence, snapshot.round.generation))

    def resetter() -> None:
        for generation in range(1, 201):
            store.reset(RoundToken(generation=generation, nonce=str(generation)))
        stop.set()

    def merger(facet: str) -> None:
        while not stop.is_set():
            token = store.current_round
            if token is None:
                continue
            store.merge_facet(token, facet, _result(facet, **{f"r{token.generation}": 1}))
            store.merge_total(token, token.generation)

    def reader() -> None:
        while not stop.is_set():
            try:
                check(store.snapshot())
            except AssertionError as exc:
                errors.append(exc)

    store.subscribe(record)
    threads = [threading.Thread(target=resetter), threading.Thread(target=reader)]
    threads += [threading.Thread(target=merger, args=(facet,)) for facet in ("browser", "os", "device")]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)

    assert not any(thread.is_alive() for thread in threads)
    assert errors == []
    sequences = [sequence for sequence, _ in delivered]
    generations = [generation for _, generation in delivered]
    assert sequences == sorted(set(sequences))
    assert generations == sorted(generations)
    assert generations[-1] == 200
