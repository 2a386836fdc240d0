"""Project queries used by the page handlers and the static exporter.

Every query degrades to an empty result instead of raising, so a broken
catalog renders as "no projects" rather than an error page.
"""

import logging

from portfolio.content_service import ContentRepository
from portfolio.locales import LocaleRegistry
from portfolio.models import Project, StaticParam

logger = logging.getLogger(__name__)

FEATURED_LIMIT = 3


class ProjectService:
    """Thin orchestration over ContentRepository."""

    def __init__(self, repository: ContentRepository, registry: LocaleRegistry) -> None:
        self.repository = repository
        self.registry = registry

    def all_projects(self, locale: str) -> list[Project]:
        """Return every project for *locale*; ``[]`` on any loader failure."""
        try:
            return self.repository.load_projects(locale)
        except Exception:
            logger.exception("Error fetching projects for locale %r", locale)
            return []

    def project_by_id(self, project_id: str, locale: str) -> Project | None:
        """Return the project with *project_id*, or ``None`` if absent."""
        try:
            return self.repository.load_project_by_id(project_id, locale)
        except Exception:
            logger.exception("Error fetching project %r (%s)", project_id, locale)
            return None

    def featured_projects(self, locale: str, limit: int = FEATURED_LIMIT) -> list[Project]:
        """Return up to *limit* featured projects in catalog order.

        ``limit <= 0`` yields an empty list.
        """
        if limit <= 0:
            return []
        featured = [p for p in self.all_projects(locale) if p.featured]
        return featured[:limit]

    def static_params(self) -> list[StaticParam]:
        """Enumerate every ``(locale, id)`` detail page a static build emits.

        Covers every supported locale, using the same fallback catalog a
        request for that locale would see. Pairs are unique and kept in
        first-seen order.
        """
        seen: set[tuple[str, str]] = set()
        params: list[StaticParam] = []
        for locale in self.registry.codes:
            for project in self.all_projects(locale):
                key = (locale, project.id)
                if key in seen:
                    continue
                seen.add(key)
                params.append(StaticParam(locale=locale, id=project.id))
        logger.info("Generated %d static project params.", len(params))
        return params
