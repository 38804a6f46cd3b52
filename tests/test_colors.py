"""Tests for series color assignment strategies."""

import re

import pytest

from fulfillment_analytics.analyses.colors import (
    HashColorAssigner,
    RandomColorAssigner,
    format_rgb,
    make_color_assigner,
)

RGB_PATTERN = re.compile(r"^rgb\((\d{1,3}), (\d{1,3}), (\d{1,3})\)$")


def _channels(color):
    match = RGB_PATTERN.match(color)
    assert match, color
    return [int(part) for part in match.groups()]


class TestHashColorAssigner:
    """Deterministic, name-derived colors."""

    def test_same_name_same_color_across_instances(self):
        assert HashColorAssigner().assign("Mug") == HashColorAssigner().assign("Mug")

    def test_different_names_usually_differ(self):
        colors = {HashColorAssigner().assign(f"item-{i}") for i in range(20)}
        assert len(colors) > 1

    def test_salt_changes_palette(self):
        assert HashColorAssigner("a").assign("Mug") != HashColorAssigner("b").assign("Mug")

    def test_channels_in_range(self):
        assert all(0 <= c <= 255 for c in _channels(HashColorAssigner().assign("Mug")))


class TestRandomColorAssigner:
    """Random colors, reproducible only with a seed."""

    def test_seeded_sequences_match(self):
        first = RandomColorAssigner(seed=42)
        second = RandomColorAssigner(seed=42)
        names = ["A", "B", "C"]
        assert [first.assign(n) for n in names] == [second.assign(n) for n in names]

    def test_valid_rgb(self):
        assigner = RandomColorAssigner()
        for _ in range(50):
            assert all(0 <= c <= 255 for c in _channels(assigner.assign("A")))


class TestMakeColorAssigner:
    """Test make_color_assigner."""

    def test_hash_mode(self):
        assert isinstance(make_color_assigner("hash"), HashColorAssigner)

    def test_random_mode(self):
        assert isinstance(make_color_assigner("random", seed=1), RandomColorAssigner)

    def test_unknown_mode_raises_error(self):
        with pytest.raises(ValueError, match="Unsupported color mode"):
            make_color_assigner("rainbow")


def test_format_rgb():
    assert format_rgb(55, 128, 191) == "rgb(55, 128, 191)"
