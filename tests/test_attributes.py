"""Tests for DeclaredAttributes."""

from config.attributes import (
    CONFIG_ENV_VAR,
    LANGS_ENV_VAR,
    DeclaredAttributes,
)
from tests.factories.config_factories import make_settings


def test_from_element_reads_attribute_pair():
    attrs = DeclaredAttributes.from_element(
        {"th-config": "config.$LANG.json", "rv-langs": '["en"]', "id": "map"}
    )
    assert attrs == DeclaredAttributes(config="config.$LANG.json", langs='["en"]')


def test_from_element_missing_attributes():
    assert DeclaredAttributes.from_element({}) == DeclaredAttributes()


def test_from_settings_serializes_yaml_sequence():
    attrs = DeclaredAttributes.from_settings(make_settings(viewer_langs=["en", "fr"]))

    assert attrs.config == "config.$LANG.json"
    assert attrs.langs == '["en", "fr"]'


def test_from_settings_without_viewer_section():
    assert DeclaredAttributes.from_settings({}) == DeclaredAttributes()


def test_from_env(monkeypatch):
    monkeypatch.setenv(CONFIG_ENV_VAR, '{"a": 1}')
    monkeypatch.delenv(LANGS_ENV_VAR, raising=False)

    assert DeclaredAttributes.from_env() == DeclaredAttributes(config='{"a": 1}')


def test_overlay_prefers_declared_values():
    base = DeclaredAttributes(config="base.$LANG.json", langs='["en"]')
    result = base.overlay(DeclaredAttributes(config="other.$LANG.json"))

    assert result == DeclaredAttributes(config="other.$LANG.json", langs='["en"]')
