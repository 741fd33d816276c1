"""Tests for node size estimation."""

import pytest

from jsongraph.config import LayoutOptions
from jsongraph.graph.model import ColorTag, FieldRow, FieldsLabel, JsonNode, NodeKind, SimpleLabel
from jsongraph.layout.estimator import NodeSize, NodeSizeEstimator, estimate_node_size


def simple(text):
    return JsonNode("n", NodeKind.PRIMITIVE, SimpleLabel(text, ColorTag.STRING), has_incoming_edge=False)


def fields(*pairs):
    rows = tuple(FieldRow(k, v, ColorTag.NUMERIC) for k, v in pairs)
    return JsonNode("n", NodeKind.OBJECT, FieldsLabel(rows), has_incoming_edge=False)


class TestSimpleLabels:
    def test_short_label_hits_minimums(self):
        assert estimate_node_size(simple("1")) == NodeSize(200, 60)

    def test_width_grows_with_text(self):
        # 30 * 7.5 + 40
        assert estimate_node_size(simple("x" * 30)).width == 265

    def test_width_capped(self):
        assert estimate_node_size(simple("x" * 53)).width == 350


class TestFieldLabels:
    def test_height_per_row(self):
        size = estimate_node_size(fields(("a", "1"), ("b", "2"), ("c", "3")))
        assert size == NodeSize(200, 3 * 24 + 30)

    def test_widest_row_sets_width(self):
        # "key: " + 25 chars = 30 chars
        size = estimate_node_size(fields(("a", "1"), ("key", "v" * 25)))
        assert size.width == 265

    def test_empty_object_gets_minimum_box(self):
        assert estimate_node_size(fields()) == NodeSize(200, 60)

    def test_single_row_uses_height_floor(self):
        assert estimate_node_size(fields(("a", "1"))).height == 60


class TestOptions:
    def test_custom_band(self):
        opts = LayoutOptions(min_width=50, max_width=100, min_height=10, char_width=10, width_padding=0)
        estimator = NodeSizeEstimator(opts)
        assert estimator.estimate(simple("abcdefg")).width == 70
        assert estimator.estimate(simple("x" * 20)).width == 100
        assert estimator.estimate(simple("")).width == 50

    @pytest.mark.parametrize("text", ["", "a", "x" * 500])
    def test_width_always_within_band(self, text):
        width = estimate_node_size(simple(text)).width
        assert 200 <= width <= 350
