"""Process-wide wiring of the immutable site components.

``build_site`` is called once (FastAPI lifespan or the static exporter);
the resulting Site is shared read-only by every request.
"""

from dataclasses import dataclass
from pathlib import Path

from portfolio.config import Settings
from portfolio.content_service import ContentRepository
from portfolio.locales import LocaleRegistry, default_registry
from portfolio.project_service import ProjectService
from portfolio.routing import PathBuilder


@dataclass(frozen=True)
class Site:
    settings: Settings
    registry: LocaleRegistry
    repository: ContentRepository
    projects: ProjectService
    paths: PathBuilder

    @property
    def messages_root(self) -> Path:
        return self.settings.messages_dir


def build_site(settings: Settings, static_export: bool | None = None) -> Site:
    """Construct the registry, repository, project service and path builder.

    Args:
        settings: Loaded application settings.
        static_export: Override the URL scheme; defaults to
            ``settings.is_static_export``.
    """
    registry = default_registry(settings.default_locale)
    repository = ContentRepository(settings.content_dir, registry)
    if static_export is None:
        static_export = settings.is_static_export
    return Site(
        settings=settings,
        registry=registry,
        repository=repository,
        projects=ProjectService(repository, registry),
        paths=PathBuilder(registry=registry, static_export=static_export),
    )
