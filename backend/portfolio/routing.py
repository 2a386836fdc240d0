"""Locale-aware URL construction.

Two URL schemes, selected once per process from ``DEPLOY_TARGET``:

=================  ====================  ======================
route              dynamic (en / fr)     static (en / fr)
=================  ====================  ======================
home               ``/`` / ``/fr``       ``/`` / ``/fr/``
about              ``/about`` / ...      ``/en/about/`` / ...
project-detail     ``/projects/x``       ``/en/projects/x/``
=================  ====================  ======================

Dynamic mode prefixes only non-default locales. Static mode prefixes every
locale (except the default locale's home, which is ``/``) and always ends
with a trailing slash so directory-style output resolves on static hosts.
"""

from enum import Enum
from types import MappingProxyType
from urllib.parse import quote, unquote

from pydantic import BaseModel, ConfigDict

from portfolio.config import Settings
from portfolio.errors import UnknownRoute
from portfolio.locales import LocaleRegistry


class Route(str, Enum):
    HOME = "home"
    ABOUT = "about"
    PROJECTS = "projects"
    CONTACT = "contact"
    PROJECT_DETAIL = "project-detail"


ROUTE_TABLE = MappingProxyType(
    {
        Route.HOME: "",
        Route.ABOUT: "/about",
        Route.PROJECTS: "/projects",
        Route.CONTACT: "/contact",
        Route.PROJECT_DETAIL: "/projects/{id}",
    }
)

# Header navigation order.
NAV_ROUTES: tuple[Route, ...] = (Route.HOME, Route.ABOUT, Route.PROJECTS, Route.CONTACT)


def _coerce_route(route: "Route | str") -> Route:
    if isinstance(route, Route):
        return route
    try:
        return Route(route)
    except ValueError:
        raise UnknownRoute(f"Unknown route: {route!r}") from None


class PathBuilder(BaseModel):
    """Maps ``(locale, route)`` to a canonical path for one URL scheme."""

    model_config = ConfigDict(frozen=True)

    registry: LocaleRegistry
    static_export: bool = False

    @classmethod
    def from_settings(cls, registry: LocaleRegistry, settings: Settings) -> "PathBuilder":
        return cls(registry=registry, static_export=settings.is_static_export)

    def href(
        self, locale: str, route: "Route | str", project_id: str | None = None
    ) -> str:
        """Return the path for *route* in *locale*.

        Raises:
            UnknownRoute: for a route outside ROUTE_TABLE, or a
                project-detail route without a project id.
            UnknownLocale: for an unsupported locale.
        """
        resolved = _coerce_route(route)
        self.registry.validate_code(locale)

        base = ROUTE_TABLE[resolved]
        if resolved is Route.PROJECT_DETAIL:
            if not project_id:
                raise UnknownRoute("project-detail requires a project id")
            base = base.format(id=quote(project_id, safe=""))

        is_default = locale == self.registry.default

        if self.static_export:
            if resolved is Route.HOME and is_default:
                return "/"
            return f"/{locale}{base}/"

        if is_default:
            return base or "/"
        return f"/{locale}{base}"

    def nav_links(self, locale: str) -> list[tuple[str, str]]:
        """Return ``(route name, href)`` pairs for the header navigation."""
        return [(route.value, self.href(locale, route)) for route in NAV_ROUTES]

    def parse(self, path: str) -> tuple[str, Route, str | None] | None:
        """Recover ``(locale, route, project id)`` from a concrete path.

        Accepts paths from either scheme, with or without a trailing slash.
        Returns ``None`` when the path does not correspond to a route.
        """
        segments = [s for s in path.split("?")[0].split("/") if s]
        locale = self.registry.default
        if segments and self.registry.is_supported(segments[0]):
            locale = segments.pop(0)

        if not segments:
            return locale, Route.HOME, None
        if len(segments) == 1:
            for route in (Route.ABOUT, Route.PROJECTS, Route.CONTACT):
                if ROUTE_TABLE[route] == f"/{segments[0]}":
                    return locale, route, None
            return None
        if len(segments) == 2 and segments[0] == "projects":
            return locale, Route.PROJECT_DETAIL, unquote(segments[1])
        return None

    def switch_locale(self, path: str, to_locale: str) -> str:
        """Map *path* to the equivalent page in *to_locale*.

        Unrecognised paths land on the target locale's home page.
        """
        parsed = self.parse(path)
        if parsed is None:
            return self.href(to_locale, Route.HOME)
        _, route, project_id = parsed
        return self.href(to_locale, route, project_id)

    def alternates(
        self, route: "Route | str", project_id: str | None = None
    ) -> list[tuple[str, str]]:
        """Return ``(locale, href)`` for every locale, for hreflang links."""
        return [
            (code, self.href(code, route, project_id)) for code in self.registry.codes
        ]
