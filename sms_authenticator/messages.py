"""
Message Formatting
==================
Localized notification text for issued codes.
"""

from typing import Dict, Mapping, Optional, Protocol

import structlog

from .exceptions import InvalidConfig

logger = structlog.get_logger(__name__)

AUTH_CODE_TEXT = "authCodeText"

DEFAULT_CATALOGS: Dict[str, Dict[str, str]] = {
    "en": {AUTH_CODE_TEXT: "Your SMS code is %s and is valid for %d minutes."},
    "de": {AUTH_CODE_TEXT: "Dein SMS-Code ist %s und ist %d Minuten gültig."},
}


class MessageFormatter(Protocol):
    def render_auth_code_message(
        self, locale: Optional[str], code: str, ttl_minutes: int
    ) -> str:  # pragma: no cover - interface
        ...


class CatalogMessageFormatter:
    """
    Renders `authCodeText` from per-locale message catalogs.

    Lookup order is the exact locale, its language ("de-AT" -> "de"),
    then the default locale. Templates take two positional arguments:
    the code and the validity in whole minutes.
    """

    def __init__(
        self,
        catalogs: Optional[Mapping[str, Mapping[str, str]]] = None,
        default_locale: str = "en",
    ):
        self.catalogs = {
            _normalize(locale): dict(messages)
            for locale, messages in (catalogs or DEFAULT_CATALOGS).items()
        }
        self.default_locale = _normalize(default_locale)

    def get_template(self, locale: Optional[str], key: str = AUTH_CODE_TEXT) -> str:
        for candidate in self._candidates(locale):
            template = self.catalogs.get(candidate, {}).get(key)
            if template is not None:
                return template
        raise InvalidConfig(f"No message template '{key}' for locale {locale!r}", key=key)

    def render_auth_code_message(self, locale: Optional[str], code: str, ttl_minutes: int) -> str:
        template = self.get_template(locale)
        try:
            return template % (code, ttl_minutes)
        except (TypeError, ValueError) as e:
            raise InvalidConfig(f"Malformed message template '{AUTH_CODE_TEXT}': {e}", key=AUTH_CODE_TEXT)

    def _candidates(self, locale: Optional[str]):
        if locale:
            normalized = _normalize(locale)
            yield normalized
            language = normalized.split("-", 1)[0]
            if language != normalized:
                yield language
        yield self.default_locale


def _normalize(locale: str) -> str:
    return locale.replace("_", "-").lower()
