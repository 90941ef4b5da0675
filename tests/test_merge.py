"""Tests for merge_configs."""

from types import MappingProxyType

from helpers.merge import merge_configs


class TestMergeConfigs:
    def test_override_wins_on_conflict(self):
        result = merge_configs({"a": 1, "b": 2}, {"b": 3})
        assert result == {"a": 1, "b": 3}

    def test_nested_mappings_merge_recursively(self, defaults):
        result = merge_configs(defaults, {"layout": {"title": "Granpa"}})

        assert result["layout"]["title"] == "Granpa"
        assert result["layout"]["nav"] == {"zoom": "buttons", "extra": ["home", "help"]}
        assert result["version"] == "1.0"

    def test_lists_are_replaced_not_combined(self, defaults):
        result = merge_configs(defaults, {"layout": {"nav": {"extra": ["fullscreen"]}}})

        assert result["layout"]["nav"]["extra"] == ["fullscreen"]
        assert result["layout"]["nav"]["zoom"] == "buttons"

    def test_mapping_replaces_scalar_and_scalar_replaces_mapping(self):
        result = merge_configs({"a": 1, "b": {"c": 2}}, {"a": {"x": 1}, "b": None})
        assert result == {"a": {"x": 1}, "b": None}

    def test_inputs_are_not_mutated(self, defaults):
        override = {"layout": {"nav": {"zoom": "slider"}}}
        before = repr(defaults)

        result = merge_configs(defaults, override)
        result["layout"]["nav"]["extra"].append("about")

        assert repr(defaults) == before
        assert override == {"layout": {"nav": {"zoom": "slider"}}}

    def test_result_does_not_share_override_objects(self):
        layers = [{"id": "roads"}]
        result = merge_configs({}, {"map": {"layers": layers}})

        layers[0]["id"] = "changed"
        assert result["map"]["layers"] == [{"id": "roads"}]

    def test_multiple_overrides_apply_in_order(self):
        result = merge_configs({"a": {"b": 1, "c": 1}}, {"a": {"b": 2}}, {"a": {"c": 3}})
        assert result == {"a": {"b": 2, "c": 3}}

    def test_read_only_mappings_become_dicts(self):
        result = merge_configs({}, {"a": MappingProxyType({"b": 1})})

        assert isinstance(result["a"], dict)
        assert result == {"a": {"b": 1}}

    def test_empty_override_copies_base(self, defaults):
        result = merge_configs(defaults, {})

        assert result == defaults
        assert result is not defaults
