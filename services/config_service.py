"""Configuration service: resolves, merges and publishes the viewer configuration."""

import asyncio
import copy
from collections.abc import Awaitable, Iterable, Mapping
from types import MappingProxyType
from typing import Any, Protocol

from config.attributes import DeclaredAttributes
from config.defaults import CONFIG_DEFAULTS
from helpers.config_source import classify_source, expand_template
from helpers.language import DEFAULT_LANGUAGE, normalize_language_tag, resolve_language_list
from helpers.merge import merge_configs
from utils.errors import ConfigInitializationError
from utils.types import (
    AbsentSource,
    ConfigSource,
    FetchResponse,
    GlobalSource,
    InlineSource,
    UrlTemplateSource,
)

from .base import BaseService
from .language_service import LanguageService


class JsonFetcher(Protocol):
    async def fetch_json(self, url: str) -> FetchResponse: ...


class ConfigService(BaseService):
    """
    Loads and parses the supplied viewer configuration.

    The configuration is declared inline as JSON, by a URL template with a
    ``$LANG`` placeholder, or by the name of a pre-loaded global object.
    ``initialize()`` resolves it exactly once: inline and global
    configurations are stored under ``"en"``; a URL template is fetched once
    per declared language. Each stored entry is the declaration merged over
    the defaults, and is never replaced afterwards.

    Until ``initialize()`` settles, dependants should wait on ``ready()``.
    """

    def __init__(
        self,
        http_client: JsonFetcher,
        language_service: LanguageService | None = None,
        attributes: DeclaredAttributes | None = None,
        defaults: Mapping[str, Any] | None = None,
        globals_registry: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__("config")
        self._http = http_client
        self._language = language_service or LanguageService()
        self._attributes = attributes or DeclaredAttributes()
        self._defaults = CONFIG_DEFAULTS if defaults is None else defaults
        self._globals = dict(globals_registry or {})

        self._store: dict[str, dict[str, Any]] = {}
        self._source: ConfigSource | None = None
        self._languages: list[str] = []
        self._fallback_language = DEFAULT_LANGUAGE
        self._failure: ConfigInitializationError | None = None

    @property
    def data(self) -> Mapping[str, dict[str, Any]]:
        """Read-only snapshot of the per-language configuration store.

        Entries are copies; changing them never reaches the stored configuration.
        """
        return MappingProxyType({lang: copy.deepcopy(config) for lang, config in self._store.items()})

    @property
    def source(self) -> ConfigSource | None:
        """The classified source, once initialization has read it."""
        return self._source

    @property
    def languages(self) -> list[str]:
        return list(self._languages)

    async def _initialize_impl(self) -> None:
        declared = self._attributes
        source = classify_source(declared.config, self._globals)
        self._source = source
        log_extra = {"source_kind": source.kind.value}

        if isinstance(source, AbsentSource):
            self.logger.info("No config declared; using defaults", extra=log_extra)
            self._languages = [DEFAULT_LANGUAGE]
            self._publish(DEFAULT_LANGUAGE, {})
            return

        langs = resolve_language_list(declared.langs)

        if isinstance(source, InlineSource | GlobalSource):
            # Inline configuration is single-language
            self._languages = [DEFAULT_LANGUAGE]
            self._publish(DEFAULT_LANGUAGE, source.payload)
            return

        self._languages = langs
        self._fallback_language = langs[0]
        self.logger.info(
            "Loading config for %s from template %s", langs, source.template, extra=log_extra
        )
        await asyncio.gather(*(self._load_language(source, lang) for lang in langs))

    async def _load_language(self, source: UrlTemplateSource, lang: str) -> None:
        url = expand_template(source.template, lang)
        log_extra = {"lang": lang, "url": url}

        try:
            response = await self._http.fetch_json(url)
        except Exception as e:
            self.logger.error("Config initialization failed for %s: %s", lang, e, extra=log_extra)
            raise self._fail(f"Could not load config for '{lang}' from {url}", lang, url) from e

        if self._failure is not None:
            self.logger.debug(
                "Ignoring config for %s; initialization already failed", lang, extra=log_extra
            )
            return

        if not isinstance(response.data, dict):
            kind = "no data" if response.data is None else type(response.data).__name__
            self.logger.error(
                "Config initialization failed for %s: %s returned %s", lang, url, kind, extra=log_extra
            )
            raise self._fail(f"Config for '{lang}' at {url} is not a JSON object ({kind})", lang, url)

        self._publish(lang, response.data)

    def _fail(self, message: str, lang: str, url: str) -> ConfigInitializationError:
        error = ConfigInitializationError(message, lang=lang, url=url)
        if self._failure is None:
            self._failure = error
        return error

    def _publish(self, lang: str, config: Mapping[str, Any]) -> None:
        if lang in self._store:
            self.logger.warning("Config for %s already stored; ignoring duplicate", lang, extra={"lang": lang})
            return
        # Defaults first, then loaded config on top
        self._store[lang] = merge_configs(self._defaults, config)
        self.logger.info("Config for %s initialized", lang, extra={"lang": lang})

    def get(self, lang: str) -> dict[str, Any] | None:
        """Return the configuration stored for ``lang`` (region suffix ignored)."""
        return copy.deepcopy(self._store.get(normalize_language_tag(lang)))

    def get_current(self) -> dict[str, Any] | None:
        """
        Returns the configuration for the language currently in use.

        The proposed language wins over the committed one. If nothing is
        stored for it, the fallback language (the first one loaded) is used
        instead. The result is a copy of the stored entry; None is returned
        only when that is missing too, e.g. before initialization completed.
        """
        lang = normalize_language_tag(self._language.active_language())
        config = self._store.get(lang)
        if config is not None:
            return copy.deepcopy(config)

        fallback = self._store.get(self._fallback_language)
        if fallback is not None:
            self.logger.warning(
                "No config loaded for %s; falling back to %s",
                lang,
                self._fallback_language,
                extra={"lang": lang},
            )
        return copy.deepcopy(fallback)

    async def ready(self, extra: Iterable[Awaitable[Any]] | None = None) -> list[Any]:
        """
        Wait until the service is ready to use.

        Initialization failures are logged, not raised: ``ready`` settles
        either way so callers can unblock. Check ``state`` to tell the two
        outcomes apart.

        Args:
            extra: Optional awaitables to wait on after initialization settled.

        Returns:
            Results of ``extra`` in order; a failed awaitable contributes its exception.
        """
        try:
            # Cancelling one waiter must not cancel the shared initialization
            await asyncio.shield(self.initialize())
        except Exception as e:
            self.logger.warning('"ready" function failed: %s', e)

        results = await asyncio.gather(*(extra or ()), return_exceptions=True)
        for result in results:
            if isinstance(result, Exception):
                self.logger.warning("Awaitable passed to ready() failed: %r", result)

        self.logger.debug("Ready promise resolved.")
        return results

    async def health_check(self) -> dict[str, Any]:
        health = await super().health_check()
        health.update(
            {
                "source_kind": self._source.kind.value if self._source else None,
                "languages": self.languages,
                "loaded_languages": list(self._store),
            }
        )
        return health
