from screentime.aggregation import aggregate
from screentime.models import AggregatedUsageRecord, RawUsageRecord


def _raw(app: str, ms: int) -> RawUsageRecord:
    return RawUsageRecord(application_id=app, foreground_ms=ms)


def test_duplicates_are_merged_and_ranked() -> None:
    result = aggregate([_raw("A", 100), _raw("B", 500), _raw("A", 50)])

    assert result == [
        AggregatedUsageRecord(application_id="B", total_foreground_ms=500),
        AggregatedUsageRecord(application_id="A", total_foreground_ms=150),
    ]


def test_empty_input_yields_empty_result() -> None:
    assert aggregate([]) == []


def test_zero_totals_are_kept() -> None:
    result = aggregate([_raw("A", 0), _raw("B", 0)])

    assert {item.application_id for item in result} == {"A", "B"}
    assert all(item.total_foreground_ms == 0 for item in result)


def test_ties_keep_first_seen_order() -> None:
    result = aggregate([_raw("C", 10), _raw("A", 30), _raw("B", 20), _raw("C", 20)])

    assert [item.application_id for item in result] == ["C", "A", "B"]


def test_totals_ids_and_order_hold_for_mixed_input() -> None:
    raw = [
        _raw("com.android.chrome", 61_000),
        _raw("com.whatsapp", 5_000),
        _raw("com.android.chrome", 1_000),
        _raw("org.telegram", 90_000),
        _raw("com.whatsapp", 7_000),
        _raw("com.spotify.music", 0),
    ]

    result = aggregate(raw)

    ids = [item.application_id for item in result]
    assert len(ids) == len(set(ids))
    assert set(ids) == {record.application_id for record in raw}

    for item in result:
        expected = sum(r.foreground_ms for r in raw if r.application_id == item.application_id)
        assert item.total_foreground_ms == expected

    totals = [item.total_foreground_ms for item in result]
    assert totals == sorted(totals, reverse=True)


def test_accepts_any_iterable() -> None:
    result = aggregate(_raw("A", ms) for ms in (1, 2, 3))

    assert result == [AggregatedUsageRecord(application_id="A", total_foreground_ms=6)]
