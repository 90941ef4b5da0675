"""Tests for ServiceContainer wiring and lifecycle."""

import pytest

from config.attributes import DeclaredAttributes
from services.service_container import ServiceContainer
from tests.factories.config_factories import make_settings, make_viewer_config, write_language_files
from tests.factories.http_factories import FakeHTTPClient


class TestServiceContainer:
    def test_accessors_raise_before_initialize(self):
        container = ServiceContainer()

        with pytest.raises(RuntimeError):
            _ = container.config
        with pytest.raises(RuntimeError):
            _ = container.language
        with pytest.raises(RuntimeError):
            _ = container.http
        assert container.get_all_services() == []

    @pytest.mark.asyncio
    async def test_initialize_with_declared_attributes(self, defaults):
        http = FakeHTTPClient({"cfg.en.json": make_viewer_config("EN"), "cfg.fr.json": {}})
        container = ServiceContainer(
            attributes=DeclaredAttributes(config="cfg.$LANG.json"),
            defaults=defaults,
            http_client=http,
        )

        assert await container.initialize() is True
        assert container.config.get_current()["layout"]["title"] == "EN"

        await container.cleanup()
        assert http.closed is True

    @pytest.mark.asyncio
    async def test_attributes_default_to_settings(self, tmp_path, defaults):
        template = write_language_files(
            tmp_path, {"en": make_viewer_config("EN"), "es": make_viewer_config("ES")}
        )
        settings = make_settings(viewer_config=template, viewer_langs=["es", "en"], default_language="es-MX")
        container = ServiceContainer(settings=settings, defaults=defaults)

        try:
            assert await container.initialize() is True
            assert container.language.current_language() == "es-MX"
            assert container.config.get_current()["layout"]["title"] == "ES"
            assert container.config.languages == ["es", "en"]
        finally:
            await container.cleanup()

    @pytest.mark.asyncio
    async def test_failed_config_reports_false(self, defaults):
        container = ServiceContainer(
            attributes=DeclaredAttributes(config="cfg.$LANG.json"),
            defaults=defaults,
            http_client=FakeHTTPClient(),
        )

        assert await container.initialize() is False

        health = await container.health_check()
        assert health["services"]["config"]["status"] == "failed"
        assert health["http"]["total_requests"] == 2

    @pytest.mark.asyncio
    async def test_second_initialize_is_a_no_op(self, defaults):
        http = FakeHTTPClient()
        container = ServiceContainer(defaults=defaults, http_client=http)

        assert await container.initialize() is True
        first = container.config
        assert await container.initialize() is True
        assert container.config is first
