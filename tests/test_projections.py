"""Tests for the projection builder."""

from datetime import date, datetime

import pandas as pd
import pytest

from fulfillment_analytics.analyses.colors import HashColorAssigner
from fulfillment_analytics.analyses.projections import (
    FulfillmentProjections,
    ProjectionBuilder,
    ProjectionConfig,
    build_projections,
    build_projections_from_source,
    get_projection_config,
    set_projection_config,
)
from fulfillment_analytics.analyses.time_buckets import MonthBucketing
from fulfillment_analytics.foundation.records import FulfillmentRecord
from fulfillment_analytics.synthetic import generate_fulfillments


class TestProjectionConfig:
    """Test ProjectionConfig validation and presets."""

    def test_defaults(self):
        config = ProjectionConfig()
        assert config.top_n == 10
        assert config.bucketing is MonthBucketing.YEAR_MONTH
        assert config.color_mode == "hash"

    def test_legacy_preset(self):
        config = ProjectionConfig.from_mode("legacy")
        assert config.bucketing is MonthBucketing.MONTH_NAME
        assert config.color_mode == "random"

    def test_stable_preset_matches_defaults(self):
        assert ProjectionConfig.from_mode("stable") == ProjectionConfig()

    def test_unknown_preset_raises_error(self):
        with pytest.raises(ValueError, match="Unknown projection mode"):
            ProjectionConfig.from_mode("fancy")

    def test_invalid_top_n_raises_error(self):
        with pytest.raises(ValueError, match="top_n must be at least 1"):
            ProjectionConfig(top_n=0)

    def test_invalid_color_mode_raises_error(self):
        with pytest.raises(ValueError, match="Unsupported color mode"):
            ProjectionConfig(color_mode="rainbow")

    def test_invalid_bucketing_raises_error(self):
        with pytest.raises(ValueError, match="Unsupported bucketing"):
            ProjectionConfig(bucketing="weekly")

    def test_process_default_can_be_swapped(self):
        original = get_projection_config()
        try:
            set_projection_config(ProjectionConfig(top_n=1))
            records = [
                FulfillmentRecord("A", 1, datetime(2024, 1, 1), "C1"),
                FulfillmentRecord("B", 2, datetime(2024, 1, 1), "C2"),
            ]
            assert build_projections(records).top_items.as_pairs() == [("B", 2)]
        finally:
            set_projection_config(original)


class TestBuildProjections:
    """Test build_projections end to end."""

    def test_empty_input_yields_empty_projections(self):
        for empty in ([], None):
            projections = build_projections(empty)
            assert projections.is_empty
            assert len(projections.top_items) == 0
            assert len(projections.top_customers) == 0
            assert len(projections.fulfillments_over_time) == 0
            assert projections.item_month_matrix.axis == ()
            assert projections.item_month_matrix.series == ()

    def test_only_failed_records_yield_empty_projections(self):
        records = [
            {"item": "A", "qty": 1, "created_at": datetime(2024, 1, 1), "customer": "C", "status": "Failed"}
        ]
        assert build_projections(records).is_empty

    def test_mixed_status_scenario(self):
        records = [
            {"item": "A", "qty": 3, "created_at": datetime(2024, 1, 1), "customer": "C1", "status": "Success"},
            {"item": "B", "qty": 5, "created_at": datetime(2024, 1, 2), "customer": "C2", "status": "Success"},
            {"item": "A", "qty": 2, "created_at": datetime(2024, 2, 3), "customer": "C1", "status": "Failed"},
        ]
        projections = build_projections(records)

        assert projections.top_items.as_pairs() == [("B", 5), ("A", 3)]
        assert projections.top_customers.as_pairs() == [("C2", 5), ("C1", 3)]
        assert projections.fulfillments_over_time.as_pairs() == [("Jan 2024", 2)]
        assert projections.record_count == 2
        assert not projections.is_empty

    def test_shared_axis_and_alignment(self, sample_records):
        projections = build_projections(sample_records)
        axis = projections.fulfillments_over_time.labels

        assert list(projections.item_month_matrix.axis) == axis
        assert axis == ["Jan 2023", "Feb 2023", "Jan 2024"]
        for series in projections.item_month_matrix.series:
            assert len(series.counts) == len(axis)
        assert projections.item_month_matrix.get("Mug").counts == (1, 1, 0)

    def test_legacy_mode_collapses_years(self, sample_records):
        projections = build_projections(
            sample_records, ProjectionConfig.from_mode("legacy")
        )
        assert projections.fulfillments_over_time.as_pairs() == [("Jan", 3), ("Feb", 1)]
        assert projections.item_month_matrix.axis == ("Jan", "Feb")

    def test_malformed_records_counted_not_fatal(self):
        records = [
            {"item": "A", "qty": 1, "created_at": "2024-01-01", "customer": "C", "status": "Success"},
            {"item": "B", "qty": -1, "created_at": "2024-01-01", "customer": "C", "status": "Success"},
            {"item": "C", "qty": 1, "created_at": "garbage", "customer": "C", "status": "Success"},
        ]
        projections = build_projections(records)
        assert projections.record_count == 1
        assert projections.rejected_count == 2
        assert projections.top_items.labels == ["A"]

    def test_missing_timestamp_rejected_not_fatal(self):
        records = [
            {"item": "A", "qty": 2, "created_at": datetime(2024, 1, 5), "customer": "C", "status": "Success"},
            {"item": "B", "qty": 1, "created_at": pd.NaT, "customer": "C", "status": "Success"},
        ]
        projections = build_projections(records)
        assert projections.record_count == 1
        assert projections.rejected_count == 1
        assert projections.fulfillments_over_time.as_pairs() == [("Jan 2024", 1)]

    def test_generator_input_read_once(self):
        def stream():
            yield FulfillmentRecord("A", 2, datetime(2024, 1, 1), "C1")
            yield FulfillmentRecord("B", 1, datetime(2024, 2, 1), "C1")

        projections = build_projections(stream())
        assert projections.record_count == 2
        assert projections.item_month_matrix.names == ["A", "B"]

    def test_idempotent_with_hash_colors(self):
        records = generate_fulfillments(300, date(2024, 1, 1), date(2024, 6, 30), seed=11)
        assert build_projections(records) == build_projections(records)

    def test_random_colors_only_affect_matrix_colors(self):
        records = generate_fulfillments(200, date(2024, 1, 1), date(2024, 4, 30), seed=5)
        config = ProjectionConfig(color_mode="random")
        first = build_projections(records, config)
        second = build_projections(records, config)

        assert first.top_items == second.top_items
        assert first.top_customers == second.top_customers
        assert first.fulfillments_over_time == second.fulfillments_over_time
        assert [s.counts for s in first.item_month_matrix.series] == [
            s.counts for s in second.item_month_matrix.series
        ]

    def test_seeded_random_colors_reproducible(self):
        records = generate_fulfillments(100, date(2024, 1, 1), date(2024, 3, 31), seed=2)
        config = ProjectionConfig(color_mode="random", color_seed=99)
        assert build_projections(records, config) == build_projections(records, config)

    def test_injected_color_assigner_wins(self, sample_records):
        class Fixed:
            def assign(self, series_name):
                return "rgb(0, 0, 0)"

        projections = build_projections(sample_records, color_assigner=Fixed())
        assert {s.color for s in projections.item_month_matrix.series} == {"rgb(0, 0, 0)"}

    def test_rankings_bounded_and_sorted(self):
        records = generate_fulfillments(500, date(2024, 1, 1), date(2024, 12, 31), seed=8)
        projections = build_projections(records)
        for ranked in (projections.top_items, projections.top_customers):
            assert len(ranked) <= 10
            assert ranked.values == sorted(ranked.values, reverse=True)

    def test_as_dict_is_json_ready(self, sample_records):
        import json

        payload = build_projections(sample_records).as_dict()
        assert json.loads(json.dumps(payload)) == payload
        assert set(payload) == {
            "top_items",
            "fulfillments_over_time",
            "top_customers",
            "item_month_matrix",
            "record_count",
            "rejected_count",
            "is_empty",
        }

    def test_input_not_mutated(self):
        raw = [{"item": "A", "qty": 1, "created_at": "2024-01-01", "customer": "C", "status": "Success"}]
        snapshot = [dict(r) for r in raw]
        build_projections(raw)
        assert raw == snapshot


class TestFulfillmentProjections:
    """Test FulfillmentProjections invariants."""

    def test_default_is_empty(self):
        assert FulfillmentProjections().is_empty

    def test_builder_uses_given_config(self, sample_records):
        builder = ProjectionBuilder(ProjectionConfig(top_n=2), HashColorAssigner())
        assert len(builder.build(sample_records).top_items) == 2


class TestBuildProjectionsFromSource:
    """Retrieval failures degrade to empty projections."""

    def test_loader_failure_is_fail_soft(self):
        def failing_loader():
            raise ConnectionError("upstream unavailable")

        projections = build_projections_from_source(failing_loader)
        assert projections.is_empty

    def test_loader_stream_failing_midway_is_fail_soft(self):
        def streaming_loader():
            yield FulfillmentRecord("A", 1, datetime(2024, 1, 1), "C1")
            raise ConnectionError("stream dropped")

        projections = build_projections_from_source(streaming_loader)
        assert projections.is_empty
        assert projections.rejected_count == 0

    def test_loader_returning_none(self):
        assert build_projections_from_source(lambda: None).is_empty

    def test_loader_records_used(self, sample_records):
        projections = build_projections_from_source(lambda: sample_records)
        assert projections.record_count == 4
