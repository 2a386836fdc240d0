"""Locale registry.

The registry is an immutable table built once at startup and handed to
every consumer (content repository, path builder, templates). Supported
locales: en, fr, ar, es, tr. Arabic is the only right-to-left locale.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, model_validator

from portfolio.errors import UnknownLocale
from portfolio.models import LocaleInfo

_LOCALES: tuple[LocaleInfo, ...] = (
    LocaleInfo(code="en", name="English", flag="US"),
    LocaleInfo(code="fr", name="Français", flag="FR"),
    LocaleInfo(code="ar", name="العربية", flag="AR", rtl=True),
    LocaleInfo(code="es", name="Español", flag="ES"),
    LocaleInfo(code="tr", name="Türkçe", flag="TR"),
)
_DEFAULT = "en"


class LocaleRegistry(BaseModel):
    """Static table of supported locales with a fixed default."""

    model_config = ConfigDict(frozen=True)

    locales: tuple[LocaleInfo, ...]
    default: str

    @model_validator(mode="after")
    def _check_default(self) -> "LocaleRegistry":
        codes = [loc.code for loc in self.locales]
        if len(set(codes)) != len(codes):
            raise ValueError(f"Duplicate locale codes in registry: {codes}")
        if self.default not in codes:
            raise ValueError(
                f"Default locale {self.default!r} is not a supported locale"
            )
        return self

    @property
    def codes(self) -> list[str]:
        """Supported locale codes in declaration order."""
        return [loc.code for loc in self.locales]

    def is_supported(self, code: str) -> bool:
        return any(loc.code == code for loc in self.locales)

    def info(self, code: str) -> LocaleInfo:
        """Return name, flag and RTL flag for *code*.

        Raises:
            UnknownLocale: if *code* is not a supported locale.
        """
        for loc in self.locales:
            if loc.code == code:
                return loc
        raise UnknownLocale(code)

    def direction(self, code: str) -> Literal["ltr", "rtl"]:
        return self.info(code).direction

    def validate_code(self, code: str) -> str:
        """Return *code* unchanged if supported, otherwise raise UnknownLocale."""
        return self.info(code).code

    def negotiate(self, accept_language: str | None) -> str:
        """Pick the best supported locale from an ``Accept-Language`` header.

        Quality weights are honoured and region subtags are ignored
        (``fr-CA`` matches ``fr``). Returns the default locale when the
        header is empty or nothing matches.
        """
        if not accept_language:
            return self.default

        candidates: list[tuple[float, int, str]] = []
        for position, part in enumerate(accept_language.split(",")):
            piece = part.strip()
            if not piece:
                continue
            tag, _, params = piece.partition(";")
            quality = 1.0
            params = params.strip()
            if params.startswith("q="):
                try:
                    quality = float(params[2:])
                except ValueError:
                    quality = 0.0
            if quality <= 0:
                continue
            primary = tag.strip().split("-")[0].lower()
            candidates.append((-quality, position, primary))

        for _, _, primary in sorted(candidates):
            if self.is_supported(primary):
                return primary
        return self.default


def default_registry(default: str = _DEFAULT) -> LocaleRegistry:
    """Build the registry of all supported locales."""
    return LocaleRegistry(locales=_LOCALES, default=default)
