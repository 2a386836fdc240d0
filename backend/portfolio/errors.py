"""Domain exceptions.

Services raise these; the HTTP layer in main.py maps them to responses.
File-system and parse failures never leave the content layer as raw
``OSError`` or ``JSONDecodeError``; they are converted to one of these or
to an empty result.
"""


class PortfolioError(Exception):
    """Base class for every error raised by the portfolio package."""


class UnknownLocale(PortfolioError):
    """The requested locale code is not in the registry."""

    def __init__(self, code: str) -> None:
        super().__init__(f"Unsupported locale: {code!r}")
        self.code = code


class ContentNotFound(PortfolioError):
    """A markdown document is absent (or unreadable) for a locale."""

    def __init__(self, slug: str, locale: str) -> None:
        super().__init__(f"Content file not found: {locale}/{slug}.md")
        self.slug = slug
        self.locale = locale


class ContentMissing(PortfolioError):
    """No project catalog exists for the requested or the default locale.

    Recoverable: the repository turns this into an empty catalog.
    """

    def __init__(self, locale: str, fallback: str) -> None:
        super().__init__(
            f"No projects.json found for {locale!r} or fallback {fallback!r}"
        )
        self.locale = locale
        self.fallback = fallback


class UnknownRoute(PortfolioError):
    """The path builder was asked for a route outside the route table."""


class ContactValidationError(PortfolioError):
    """A contact submission failed validation."""

    def __init__(self, detail: str, code: str) -> None:
        super().__init__(detail)
        self.detail = detail
        # Message key used by the server-rendered form, e.g. "contact.invalid_email".
        self.code = code
