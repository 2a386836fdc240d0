"""Server-side page rendering with Jinja2 templates.

Each ``render_*`` function loads what its page needs through the Site
components and returns a complete HTML document. The same functions feed
the FastAPI handlers and the static exporter.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import markdown as md_lib  # type: ignore[import-untyped]
from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from portfolio import i18n_service
from portfolio.models import ContactSubmission, Project
from portfolio.project_service import FEATURED_LIMIT
from portfolio.routing import Route
from portfolio.site import Site
from portfolio.tech_filter import filter_by_tech, unique_techs

logger = logging.getLogger(__name__)

_MARKDOWN_EXTENSIONS = ["extra", "sane_lists"]


@lru_cache(maxsize=None)
def create_environment(templates_dir: Path) -> Environment:
    """Build the Jinja2 environment used for every page.

    One environment per templates directory; the loader still picks up
    edited templates through its mtime check.
    """
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["markdown"] = render_markdown
    return env


def render_markdown(text: str) -> Markup:
    """Convert markdown text to HTML, marked safe for Jinja2 autoescaping.

    Args:
        text: Markdown body of a content document.

    Returns:
        HTML string wrapped in Markup so Jinja2 does not re-escape it.
    """
    return Markup(md_lib.markdown(text or "", extensions=_MARKDOWN_EXTENSIONS))


# ── Shared context ────────────────────────────────────────────────────────────


def _base_context(
    site: Site,
    locale: str,
    route: Route,
    project_id: Optional[str] = None,
) -> dict[str, Any]:
    """Context every template receives: locale data, nav and metadata."""
    info = site.registry.info(locale)
    messages = i18n_service.load_messages(locale, site.messages_root, site.registry)

    def t(key: str, default: Optional[str] = None) -> str:
        return i18n_service.translate(messages, key, default)

    current_path = site.paths.href(locale, route, project_id)
    languages = [
        {
            "code": other.code,
            "name": other.name,
            "flag": other.flag,
            "href": site.paths.switch_locale(current_path, other.code),
            "active": other.code == locale,
        }
        for other in site.registry.locales
    ]

    return {
        "locale": locale,
        "direction": info.direction,
        "locale_info": info,
        "t": t,
        "href": lambda r, pid=None: site.paths.href(locale, r, pid),
        "nav_links": [
            {"name": name, "href": link, "active": name == route.value}
            for name, link in site.paths.nav_links(locale)
        ],
        "languages": languages,
        "alternates": site.paths.alternates(route, project_id),
        "current_path": current_path,
        "site": site.settings,
        "static_export": site.paths.static_export,
    }


def _render(site: Site, template: str, context: dict[str, Any]) -> str:
    env = create_environment(site.settings.templates_dir)
    return env.get_template(template).render(**context)


# ── Pages ─────────────────────────────────────────────────────────────────────


def render_home(site: Site, locale: str) -> str:
    """Home page: intro document plus featured projects."""
    context = _base_context(site, locale, Route.HOME)
    t = context["t"]
    document = site.repository.load_document_or_default(
        "home", locale, default_title=t("home.title", site.settings.site_title)
    )
    context.update(
        page_title=None,
        document=document,
        title=document.title_or(site.settings.site_title),
        featured=site.projects.featured_projects(locale, FEATURED_LIMIT),
        description=document.frontmatter.get("description", site.settings.site_description),
    )
    return _render(site, "home.html", context)


def render_about(site: Site, locale: str) -> str:
    """About page rendered from ``about.md``; defaults when the file is missing."""
    context = _base_context(site, locale, Route.ABOUT)
    t = context["t"]
    document = site.repository.load_document_or_default(
        "about", locale, default_title=t("about.title", "About")
    )
    title = document.title_or(t("about.title", "About"))
    context.update(
        page_title=title,
        title=title,
        document=document,
        description=document.frontmatter.get("description", site.settings.site_description),
    )
    return _render(site, "about.html", context)


def render_projects(site: Site, locale: str, tech: Optional[str] = None) -> str:
    """Project listing with the technology filter applied server-side."""
    context = _base_context(site, locale, Route.PROJECTS)
    t = context["t"]
    projects = site.projects.all_projects(locale)
    selected = tech or None
    context.update(
        page_title=t("projects.title", "Projects"),
        title=t("projects.title", "Projects"),
        description=t("projects.description", site.settings.site_description),
        all_tech=unique_techs(projects),
        selected_tech=selected,
        projects=filter_by_tech(projects, selected),
        total=len(projects),
    )
    return _render(site, "projects.html", context)


def render_project_detail(site: Site, locale: str, project_id: str) -> Optional[str]:
    """Detail page for one project, or ``None`` when the id is unknown."""
    project: Optional[Project] = site.projects.project_by_id(project_id, locale)
    if project is None:
        return None
    context = _base_context(site, locale, Route.PROJECT_DETAIL, project.id)
    context.update(
        page_title=project.name,
        title=project.name,
        description=project.description,
        project=project,
        body=render_markdown(project.long_description or project.description),
    )
    return _render(site, "project_detail.html", context)


def render_contact(
    site: Site,
    locale: str,
    form: Optional[ContactSubmission] = None,
    status: Optional[str] = None,
    error_key: Optional[str] = None,
) -> str:
    """Contact page. *status* is ``"success"``, ``"error"`` or ``None``."""
    context = _base_context(site, locale, Route.CONTACT)
    t = context["t"]
    document = site.repository.load_document_or_default(
        "contact", locale, default_title=t("contact.title", "Contact")
    )
    title = document.title_or(t("contact.title", "Contact"))
    context.update(
        page_title=title,
        title=title,
        document=document,
        description=document.frontmatter.get("description", site.settings.site_description),
        form=form or ContactSubmission(),
        status=status,
        error_key=error_key,
        action=site.paths.href(locale, Route.CONTACT),
    )
    return _render(site, "contact.html", context)


def render_not_found(site: Site, locale: Optional[str] = None) -> str:
    """404 page in *locale*, or the default locale when it is unknown."""
    if locale is None or not site.registry.is_supported(locale):
        locale = site.registry.default
    context = _base_context(site, locale, Route.HOME)
    t = context["t"]
    context.update(
        page_title=t("not_found.title", "Page not found"),
        title=t("not_found.title", "Page not found"),
        description=t("not_found.message", ""),
    )
    return _render(site, "not_found.html", context)
