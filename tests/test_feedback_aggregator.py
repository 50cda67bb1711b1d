from datetime import timedelta

import pytest

from nps_dashboard.core.feedback_aggregator import FeedbackAggregator, FeedbackRecord
from nps_dashboard.core.filters import FilterCriteria, FilterSemantics, Period
from tests.helpers.feedback import NOW, days_ago, iso, make_aggregator, make_record


def _ids(records: tuple[FeedbackRecord, ...]) -> list[str]:
    return [record.user_id for record in records]


def test_new_aggregator_is_empty_and_idle() -> None:
    aggregator = FeedbackAggregator()

    assert aggregator.total_responses() == 0
    assert aggregator.nps_score() == 0
    assert aggregator.filtered_view == ()
    assert aggregator.is_loading is False
    assert aggregator.semantics is FilterSemantics.CURRENT


def test_filter_before_load_yields_empty_view() -> None:
    aggregator = FeedbackAggregator()
    aggregator.filter(FilterCriteria.from_params(period="week", roles=["Manager"]))

    assert aggregator.filtered_view == ()
    assert aggregator.skipped_records == 0


def test_total_responses_counts_full_collection() -> None:
    records = [make_record(score, user_id=f"u-{i}") for i, score in enumerate([9, 9, 3, 7])]
    aggregator = make_aggregator(records)

    assert aggregator.total_responses() == 4


def test_nps_score_reference_example() -> None:
    aggregator = make_aggregator([make_record(9), make_record(9), make_record(3), make_record(7)])

    assert aggregator.nps_score() == 25


def test_empty_load_resets_everything() -> None:
    aggregator = make_aggregator([make_record(10)])
    aggregator.filter(FilterCriteria())
    aggregator.load([])

    assert aggregator.total_responses() == 0
    assert aggregator.nps_score() == 0
    aggregator.filter(FilterCriteria.from_params(period="all"))
    assert aggregator.filtered_view == ()


def test_load_copies_input_sequence() -> None:
    source = [make_record(10, user_id="a")]
    aggregator = make_aggregator(source)
    source.append(make_record(0, user_id="b"))

    assert aggregator.total_responses() == 1
    assert _ids(aggregator.records) == ["a"]


def test_load_clears_previous_filtered_view() -> None:
    aggregator = make_aggregator([make_record(10, user_id="a")])
    aggregator.filter(FilterCriteria())
    assert _ids(aggregator.filtered_view) == ["a"]

    aggregator.load([make_record(5, user_id="b")])

    assert aggregator.filtered_view == ()


def test_unrestricted_filter_returns_full_collection_in_order() -> None:
    records = [make_record(score, user_id=f"u-{i}") for i, score in enumerate([3, 10, 7, 0, 9])]
    aggregator = make_aggregator(records)

    aggregator.filter(FilterCriteria.from_params(period="all", roles=[], scores=[]))

    assert aggregator.filtered_view == tuple(records)


def test_statistics_ignore_active_filter() -> None:
    records = [
        make_record(10, user_id="a", role="Manager"),
        make_record(2, user_id="b", role="Developer"),
        make_record(3, user_id="c", role="Developer"),
    ]
    aggregator = make_aggregator(records)

    aggregator.filter(FilterCriteria.from_params(roles=["Manager"]))

    assert _ids(aggregator.filtered_view) == ["a"]
    assert aggregator.total_responses() == 3
    assert aggregator.nps_score() == -33
    assert aggregator.filtered_breakdown().score == 100


def test_role_and_score_filters_commute() -> None:
    records = [
        make_record(10, user_id="a", role="Manager"),
        make_record(9, user_id="b", role="Analyst"),
        make_record(10, user_id="c", role="Analyst"),
        make_record(4, user_id="d", role="Manager"),
        make_record(10, user_id="e", role="Developer"),
    ]
    aggregator = make_aggregator(records)

    aggregator.filter(FilterCriteria.from_params(roles=["Manager", "Analyst"]))
    by_role = aggregator.filtered_view
    second = make_aggregator(by_role)
    second.filter(FilterCriteria.from_params(scores=[10]))
    roles_then_scores = second.filtered_view

    aggregator.filter(FilterCriteria.from_params(scores=[10]))
    third = make_aggregator(aggregator.filtered_view)
    third.filter(FilterCriteria.from_params(roles=["Manager", "Analyst"]))
    scores_then_roles = third.filtered_view

    aggregator.filter(FilterCriteria.from_params(roles=["Manager", "Analyst"], scores=[10]))
    combined = aggregator.filtered_view

    assert _ids(roles_then_scores) == _ids(scores_then_roles) == _ids(combined) == ["a", "c"]


def test_repeating_a_filter_is_idempotent() -> None:
    records = [make_record(10, user_id="a", role="Manager"), make_record(5, user_id="b", role="Analyst")]
    aggregator = make_aggregator(records)
    criteria = FilterCriteria.from_params(roles=["Analyst"], scores=[5])

    aggregator.filter(criteria)
    first = aggregator.filtered_view
    aggregator.filter(criteria)

    assert aggregator.filtered_view == first
    assert _ids(first) == ["b"]


def test_out_of_range_scores_pass_through() -> None:
    aggregator = make_aggregator([make_record(11, user_id="a"), make_record(-1, user_id="b")])
    aggregator.filter(FilterCriteria.from_params(scores=[11]))

    assert aggregator.nps_score() == 0
    assert _ids(aggregator.filtered_view) == ["a"]


def test_forty_day_old_record_month_versus_quarter() -> None:
    aggregator = make_aggregator([make_record(9, user_id="old", created_at=days_ago(40))])

    aggregator.filter(FilterCriteria.from_params(period="month"))
    assert aggregator.filtered_view == ()

    aggregator.filter(FilterCriteria.from_params(period="quarter"))
    assert _ids(aggregator.filtered_view) == ["old"]


@pytest.mark.parametrize(
    ("period", "expected"),
    [
        ("today", ["h1"]),
        ("week", ["h1", "d3"]),
        ("month", ["h1", "d3", "d20"]),
        ("quarter", ["h1", "d3", "d20", "d60"]),
        ("year", ["h1", "d3", "d20", "d60", "d200"]),
        ("all", ["h1", "d3", "d20", "d60", "d200", "d400"]),
    ],
)
def test_relative_periods(period: str, expected: list[str]) -> None:
    records = [
        make_record(9, user_id="h1", created_at=iso(NOW - timedelta(hours=1))),
        make_record(9, user_id="d3", created_at=days_ago(3)),
        make_record(9, user_id="d20", created_at=days_ago(20)),
        make_record(9, user_id="d60", created_at=days_ago(60)),
        make_record(9, user_id="d200", created_at=days_ago(200)),
        make_record(9, user_id="d400", created_at=days_ago(400)),
    ]
    aggregator = make_aggregator(records)

    aggregator.filter(FilterCriteria.from_params(period=period))

    assert _ids(aggregator.filtered_view) == expected


def test_legacy_today_matches_only_current_instant() -> None:
    records = [
        make_record(9, user_id="now", created_at=iso(NOW)),
        make_record(9, user_id="hour", created_at=iso(NOW - timedelta(hours=1))),
    ]
    aggregator = make_aggregator(records, semantics=FilterSemantics.LEGACY)

    aggregator.filter(FilterCriteria.from_params(period="today"))

    assert _ids(aggregator.filtered_view) == ["now"]


def test_custom_range_includes_both_bounds() -> None:
    start = NOW - timedelta(days=10)
    end = NOW - timedelta(days=5)
    records = [
        make_record(9, user_id="before", created_at=iso(start - timedelta(seconds=1))),
        make_record(9, user_id="start", created_at=iso(start)),
        make_record(9, user_id="middle", created_at=days_ago(7)),
        make_record(9, user_id="end", created_at=iso(end)),
        make_record(9, user_id="after", created_at=iso(end + timedelta(seconds=1))),
    ]
    aggregator = make_aggregator(records)

    aggregator.filter(FilterCriteria.from_params(period="custom", start_date=start, end_date=end))

    assert _ids(aggregator.filtered_view) == ["start", "middle", "end"]


def test_custom_range_missing_bound_falls_back_to_all() -> None:
    records = [make_record(9, user_id="a", created_at=days_ago(500)), make_record(9, user_id="b")]
    aggregator = make_aggregator(records)

    aggregator.filter(FilterCriteria.from_params(period="custom", start_date=NOW))

    assert _ids(aggregator.filtered_view) == ["a", "b"]


def test_malformed_timestamps_are_skipped_not_fatal(caplog: pytest.LogCaptureFixture) -> None:
    records = [
        make_record(9, user_id="good", created_at=days_ago(1)),
        make_record(9, user_id="bad", created_at="31/12/2025"),
        make_record(9, user_id="empty", created_at=""),
    ]
    aggregator = make_aggregator(records)

    with caplog.at_level("WARNING"):
        aggregator.filter(FilterCriteria.from_params(period="week"))

    assert _ids(aggregator.filtered_view) == ["good"]
    assert aggregator.skipped_records == 2
    assert any(record.getMessage() == "feedback_records_skipped" for record in caplog.records)


def test_malformed_timestamps_ignored_without_time_filter() -> None:
    aggregator = make_aggregator([make_record(9, user_id="bad", created_at="garbage")])

    aggregator.filter(FilterCriteria.from_params(roles=["Manager"]))

    assert _ids(aggregator.filtered_view) == ["bad"]
    assert aggregator.skipped_records == 0


def test_is_loading_is_caller_controlled() -> None:
    aggregator = FeedbackAggregator()
    aggregator.is_loading = True
    aggregator.load([make_record(9)])
    aggregator.filter(FilterCriteria())

    assert aggregator.is_loading is True


def test_breakdown_by_role_uses_first_seen_order() -> None:
    records = [
        make_record(10, role="Manager"),
        make_record(3, role="Developer"),
        make_record(8, role="Manager"),
        make_record(9, role="Developer"),
    ]
    aggregator = make_aggregator(records)

    breakdown = aggregator.breakdown_by_role()

    assert list(breakdown) == ["Manager", "Developer"]
    assert breakdown["Manager"].score == 50
    assert breakdown["Developer"].score == 0
    assert aggregator.available_roles() == ["Manager", "Developer"]


def test_breakdown_and_distribution_over_filtered_view() -> None:
    records = [
        make_record(10, role="Manager", created_at=days_ago(2)),
        make_record(3, role="Developer", created_at=days_ago(50)),
        make_record(10, role="Developer", created_at=days_ago(1)),
    ]
    aggregator = make_aggregator(records)
    aggregator.filter(FilterCriteria.from_params(period="week"))

    assert list(aggregator.breakdown_by_role(use_filtered=True)) == ["Manager", "Developer"]
    assert aggregator.score_distribution(use_filtered=True) == {10: 2}
    assert aggregator.score_distribution() == {3: 1, 10: 2}


def test_record_round_trips_through_wire_mapping() -> None:
    payload = {
        "user_id": "u-9",
        "score": "8",
        "reason": "ok",
        "created_at": "2026-10-01T00:00:00Z",
        "company_id": "c-2",
        "role": "Analyst",
    }

    record = FeedbackRecord.from_dict(payload)

    assert record.score == 8
    assert record.to_dict() == {**payload, "score": 8}
