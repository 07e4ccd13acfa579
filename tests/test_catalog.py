"""Tests for tip descriptors and catalog loading."""

import json

import pytest

from tipjar.tips import CatalogError, TipCatalog, TipDescriptor, load_catalog

from conftest import ALWAYS_SHOWS


class TestTipDescriptor:
    def test_defaults(self):
        tip = TipDescriptor.from_dict({"id": "t", "text": "Hello"})

        assert tip.required_show_count is None
        assert tip.required_triggers == 10
        assert tip.require_dismiss is False
        assert tip.maximum_dismiss is None
        assert tip.allow_dismiss is True
        assert tip.show_in_context is None
        assert tip.maximum_in_context is None
        assert tip.randomize_display is False
        assert tip.action_button is None

    def test_context_maps_are_read_only(self):
        source = {"a": 1}
        tip = TipDescriptor.from_dict({"id": "t", "text": "x", "showInContext": source})
        source["a"] = 99

        assert tip.show_in_context["a"] == 1
        with pytest.raises(TypeError):
            tip.show_in_context["b"] = 2

    def test_descriptor_is_frozen(self):
        tip = TipDescriptor.from_dict(ALWAYS_SHOWS)
        with pytest.raises(AttributeError):
            tip.text = "changed"

    @pytest.mark.parametrize("data", [
        {"text": "no id"},
        {"id": "", "text": "empty id"},
        {"id": "t"},
        {"id": "t", "text": "x", "showInContext": ["a"]},
        {"id": "t", "text": "x", "actionButton": "click"},
        {"id": "t", "text": "x", "requiredTriggers": "0"},
        {"id": "t", "text": "x", "requiredTriggers": None},
        {"id": "t", "text": "x", "requiredShowCount": "3"},
        {"id": "t", "text": "x", "requiredShowCount": -1},
        {"id": "t", "text": "x", "requiredShowCount": 2.5},
        {"id": "t", "text": "x", "maximumDismiss": True},
        {"id": "t", "text": "x", "randomizeDisplay": 1.5},
        {"id": "t", "text": "x", "randomizeDisplay": "often"},
        {"id": "t", "text": "x", "requireDismiss": "yes"},
        {"id": "t", "text": "x", "allowDismiss": None},
        {"id": "t", "text": "x", "showInContext": {"c": "1"}},
        {"id": "t", "text": "x", "maximumInContext": {"c": -2}},
        "not a mapping",
    ])
    def test_invalid_entries(self, data):
        with pytest.raises(CatalogError):
            TipDescriptor.from_dict(data)

    def test_valid_limits_accepted(self):
        tip = TipDescriptor.from_dict({
            "id": "t", "text": "x", "requiredShowCount": 0, "requiredTriggers": 0,
            "maximumDismiss": 3, "randomizeDisplay": 1, "requireDismiss": 3,
            "showInContext": {"c": 0}, "maximumInContext": {"c": 4},
        })
        assert tip.required_show_count == 0
        assert tip.randomize_display == 1
        assert tip.maximum_in_context["c"] == 4

    def test_action_must_be_callable_without_resolver(self):
        with pytest.raises(CatalogError):
            TipDescriptor.from_dict({"id": "t", "text": "x", "actionButton": {"text": "Go", "action": "https://x"}})

    def test_resolver_turns_action_into_callable(self):
        opened = []
        tip = TipDescriptor.from_dict(
            {"id": "t", "text": "x", "actionButton": {"text": "Go", "action": "https://x"}},
            resolve_action=lambda target: lambda: opened.append(target),
        )
        tip.action_button.action()
        assert opened == ["https://x"]


class TestTipCatalog:
    def test_keeps_order_and_lookup(self):
        catalog = TipCatalog([{"id": "b", "text": "B"}, {"id": "a", "text": "A"}])
        assert catalog.ids == ["b", "a"]
        assert catalog.get("a").text == "A"
        assert catalog.get("missing") is None
        assert len(catalog) == 2

    def test_rejects_duplicate_ids(self):
        with pytest.raises(CatalogError, match="alwaysShowsTip"):
            TipCatalog([ALWAYS_SHOWS, dict(ALWAYS_SHOWS, text="tip2Text")])


class TestLoadCatalog:
    def test_loads_list(self, tmp_path):
        path = tmp_path / "tips.json"
        path.write_text(json.dumps([ALWAYS_SHOWS, {"id": "second", "text": "Two"}]))

        catalog = load_catalog(path)

        assert catalog.ids == ["alwaysShowsTip", "second"]

    def test_loads_object_with_tips_key(self, tmp_path):
        path = tmp_path / "tips.json"
        path.write_text(json.dumps({"tips": [ALWAYS_SHOWS]}))
        assert load_catalog(path).ids == ["alwaysShowsTip"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError, match="not found"):
            load_catalog(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "tips.json"
        path.write_text("{not json")
        with pytest.raises(CatalogError, match="not valid JSON"):
            load_catalog(path)

    def test_wrong_shape(self, tmp_path):
        path = tmp_path / "tips.json"
        path.write_text(json.dumps("just a string"))
        with pytest.raises(CatalogError):
            load_catalog(path)
