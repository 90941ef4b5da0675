"""Tests for the command-line entry point."""

import json

import pytest

import cli
from config.attributes import CONFIG_ENV_VAR, LANGS_ENV_VAR
from tests.factories.config_factories import (
    make_settings,
    make_viewer_config,
    temp_settings_file,
    write_language_files,
)


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep CLI runs from reconfiguring the root logger or writing log files."""
    monkeypatch.setattr(cli, "setup_logging", lambda *_args, **_kwargs: None)
    monkeypatch.setattr(cli, "shutdown_logging", lambda: None)
    monkeypatch.setattr(cli, "load_dotenv", lambda *_args, **_kwargs: False)
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv(LANGS_ENV_VAR, raising=False)


def test_inline_config_is_printed(capsys):
    code = cli.main(["--settings", "/nonexistent/settings.yaml", "--config", '{"layout": {"title": "Granpa"}}'])

    assert code == 0
    printed = json.loads(capsys.readouterr().out)
    assert printed["layout"]["title"] == "Granpa"
    # Defaults are merged underneath
    assert printed["version"] == "1.0"


def test_template_with_language_selection(tmp_path, capsys):
    template = write_language_files(tmp_path, {"en": make_viewer_config("EN"), "fr": make_viewer_config("FR")})

    code = cli.main(["--settings", "/nonexistent/settings.yaml", "--config", template, "--lang", "fr-CA"])

    assert code == 0
    assert json.loads(capsys.readouterr().out)["layout"]["title"] == "FR"


def test_missing_language_file_exits_with_error(tmp_path, capsys):
    template = write_language_files(tmp_path, {"en": make_viewer_config("EN")})

    code = cli.main(["--settings", "/nonexistent/settings.yaml", "--config", template])

    assert code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "failed to load" in captured.err


def test_settings_file_supplies_declarations(tmp_path, capsys):
    template = write_language_files(tmp_path, {"es": make_viewer_config("ES")})
    settings = make_settings(viewer_config=template, viewer_langs=["es"], default_language="es")

    with temp_settings_file(settings) as path:
        code = cli.main(["--settings", path])

    assert code == 0
    assert json.loads(capsys.readouterr().out)["layout"]["title"] == "ES"


def test_env_overrides_settings_and_flags_override_env(monkeypatch):
    monkeypatch.setenv(CONFIG_ENV_VAR, "env.$LANG.json")
    monkeypatch.setenv(LANGS_ENV_VAR, '["fr"]')
    settings = make_settings(viewer_config="settings.$LANG.json", viewer_langs=["en"])

    args = cli.build_parser().parse_args(["--config", "flag.$LANG.json"])
    attributes = cli.resolve_attributes(args, settings)

    assert attributes.config == "flag.$LANG.json"
    assert attributes.langs == '["fr"]'
