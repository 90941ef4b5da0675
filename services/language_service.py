"""Language selection: which language the viewer is (about to be) displayed in."""

from helpers.language import DEFAULT_LANGUAGE
from utils.logging import get_logger

logger = get_logger(__name__)


class LanguageService:
    """
    Tracks the committed language and an optional proposed one.

    A proposal is a language the application is switching to but has not
    committed yet; lookups prefer it over the current language. Tags are
    kept as given (region suffixes included).
    """

    def __init__(self, current: str = DEFAULT_LANGUAGE) -> None:
        self._current = current
        self._proposed: str | None = None

    @classmethod
    def from_settings(cls, settings: dict) -> "LanguageService":
        i18n_cfg = settings.get("i18n") or {}
        return cls(current=i18n_cfg.get("default_language") or DEFAULT_LANGUAGE)

    def proposed_language(self) -> str | None:
        return self._proposed

    def current_language(self) -> str:
        return self._current

    def propose(self, tag: str) -> None:
        logger.debug("Language %s proposed (current %s)", tag, self._current)
        self._proposed = tag

    def use(self, tag: str) -> None:
        """Commit ``tag`` as the current language and clear any proposal."""
        if tag != self._current:
            logger.info("Language switched from %s to %s", self._current, tag)
        self._current = tag
        self._proposed = None

    def active_language(self) -> str:
        """The proposed language if one is pending, else the current one."""
        return self._proposed or self._current
