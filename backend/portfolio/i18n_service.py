"""Internationalisation (i18n) service.

Loads UI message bundles from ``data/messages/{locale}.json``.
Falls back to the default locale's bundle when the requested one is missing
or unreadable, and to an empty bundle as a last resort so a page never
fails to render because of a missing string.
"""

import json
import logging
from pathlib import Path
from typing import Any

from portfolio.locales import LocaleRegistry
from portfolio.models import LanguageOption
from portfolio.routing import PathBuilder, Route

logger = logging.getLogger(__name__)


def _read_bundle(path: Path) -> dict[str, Any] | None:
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.error("Could not read message bundle %s: %s", path, exc)
        return None
    return data if isinstance(data, dict) else None


def load_messages(
    locale: str, messages_root: Path, registry: LocaleRegistry
) -> dict[str, Any]:
    """Return the message bundle for *locale*.

    Args:
        locale: Locale code, e.g. ``"fr"``. Unsupported codes use the default.
        messages_root: Directory holding ``{locale}.json`` files.
        registry: Locale registry supplying the default locale.

    Returns:
        Nested dict of UI strings, e.g. ``{"nav": {"about": "À propos"}}``.
    """
    code = locale if registry.is_supported(locale) else registry.default
    data = _read_bundle(messages_root / f"{code}.json")
    if data is not None:
        return data

    if code != registry.default:
        logger.warning("Messages not found for %r; using %r.", code, registry.default)
        data = _read_bundle(messages_root / f"{registry.default}.json")
        if data is not None:
            return data

    logger.error("No message bundle available for %r.", code)
    return {}


def translate(messages: dict[str, Any], key: str, default: str | None = None) -> str:
    """Look up a dotted key such as ``"nav.about"`` in a message bundle.

    Returns *default* (or the key itself) when the key is missing or does not
    point at a string.
    """
    current: Any = messages
    for part in key.split("."):
        if isinstance(current, dict) and part in current:
            current = current[part]
        else:
            return default if default is not None else key
    if isinstance(current, (dict, list)) or current is None:
        return default if default is not None else key
    return str(current)


def get_supported_languages(paths: PathBuilder) -> list[LanguageOption]:
    """Return the language picker options with each locale's home link."""
    return [
        LanguageOption(
            code=info.code,
            name=info.name,
            flag=info.flag,
            direction=info.direction,
            href=paths.href(info.code, Route.HOME),
        )
        for info in paths.registry.locales
    ]
