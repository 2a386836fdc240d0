"""File-backed content repository.

Reads markdown documents and project catalogs from a locale-partitioned
tree::

    content_root/{locale}/{slug}.md
    content_root/{locale}/projects.json

Nothing is cached: every call reads the file system again. I/O and parse
failures are converted here into ``ContentNotFound`` or an empty result so
the rendering layer never sees a raw ``OSError``.
"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from portfolio.errors import ContentMissing, ContentNotFound
from portfolio.locales import LocaleRegistry
from portfolio.models import ContentDocument, Project

logger = logging.getLogger(__name__)

PROJECTS_FILE = "projects.json"
_DELIMITER = "---"


# ── Parsing ───────────────────────────────────────────────────────────────────


def parse_document(text: str, slug: str) -> ContentDocument:
    """Split a markdown file into frontmatter and body.

    The frontmatter is a YAML mapping between two ``---`` lines at the very
    top of the file. A missing, empty or non-mapping block yields ``{}``;
    unknown keys are kept as-is.

    Args:
        text: Raw file contents.
        slug: Document slug (file name without ``.md``).

    Returns:
        The parsed ContentDocument.

    Raises:
        yaml.YAMLError: if the frontmatter block is not valid YAML.
    """
    text = text.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != _DELIMITER:
        return ContentDocument(slug=slug, frontmatter={}, body=text)

    for index in range(1, len(lines)):
        if lines[index].strip() == _DELIMITER:
            block = "".join(lines[1:index])
            body = "".join(lines[index + 1:])
            data = yaml.safe_load(block) if block.strip() else None
            frontmatter: dict[str, Any] = data if isinstance(data, dict) else {}
            return ContentDocument(
                slug=slug,
                frontmatter={str(k): v for k, v in frontmatter.items()},
                body=body.lstrip("\r\n"),
            )

    # Opening delimiter without a closing one: treat everything as body.
    return ContentDocument(slug=slug, frontmatter={}, body=text)


# ── Repository ────────────────────────────────────────────────────────────────


class ContentRepository:
    """Reads documents and project catalogs for a content root."""

    def __init__(self, content_root: Path, registry: LocaleRegistry) -> None:
        self.content_root = Path(content_root)
        self.registry = registry

    def _locale_dir(self, locale: str) -> Path:
        return self.content_root / locale

    def _inside_root(self, path: Path) -> bool:
        root = self.content_root.resolve()
        try:
            path.resolve().relative_to(root)
        except ValueError:
            return False
        return True

    # -- documents ------------------------------------------------------------

    def load_document(self, slug: str, locale: str) -> ContentDocument:
        """Load ``content_root/{locale}/{slug}.md``.

        Raises:
            ContentNotFound: if the file does not exist, escapes the content
                root, cannot be read or has malformed frontmatter.
        """
        path = self._locale_dir(locale) / f"{slug}.md"
        if not slug or not self._inside_root(path) or not path.is_file():
            raise ContentNotFound(slug, locale)
        try:
            text = path.read_text(encoding="utf-8")
            return parse_document(text, slug)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
            logger.error("Error loading content for slug %r (%s): %s", slug, locale, exc)
            raise ContentNotFound(slug, locale) from exc

    def load_document_or_default(
        self, slug: str, locale: str, default_title: str = ""
    ) -> ContentDocument:
        """Like load_document, but substitute an empty document on a miss."""
        try:
            return self.load_document(slug, locale)
        except ContentNotFound:
            logger.warning("No %s.md for locale %r; rendering defaults.", slug, locale)
            frontmatter = {"title": default_title} if default_title else {}
            return ContentDocument(slug=slug, frontmatter=frontmatter, body="")

    def load_all_documents(self, directory: str, locale: str) -> list[ContentDocument]:
        """Load every ``*.md`` under ``content_root/{locale}/{directory}``.

        Returns an empty list when the directory does not exist. Files that
        fail to parse are skipped with an error log.
        """
        folder = self._locale_dir(locale) / directory
        if not self._inside_root(folder) or not folder.is_dir():
            logger.warning("Content directory not found: %s", folder)
            return []

        documents: list[ContentDocument] = []
        for path in sorted(folder.glob("*.md")):
            try:
                documents.append(parse_document(path.read_text(encoding="utf-8"), path.stem))
            except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
                logger.error("Skipping unreadable document %s: %s", path, exc)
        return documents

    # -- projects -------------------------------------------------------------

    def resolve_catalog(self, locale: str) -> Path:
        """Return the catalog path for *locale*, falling back to the default.

        Raises:
            ContentMissing: if neither the requested nor the default
                locale has a ``projects.json``.
        """
        default = self.registry.default
        requested = self._locale_dir(locale) / PROJECTS_FILE
        if self._inside_root(requested) and requested.is_file():
            return requested

        fallback = self._locale_dir(default) / PROJECTS_FILE
        if fallback.is_file():
            logger.info("No projects.json for %r; using %r catalog.", locale, default)
            return fallback

        raise ContentMissing(locale, default)

    def load_projects(self, locale: str) -> list[Project]:
        """Return the project catalog for *locale*.

        Falls back to the default locale's catalog when the requested one is
        absent. Returns ``[]`` (with a warning) when neither exists, and
        ``[]`` (with an error) when the file is unreadable or not a list.
        """
        try:
            path = self.resolve_catalog(locale)
        except ContentMissing as exc:
            logger.warning("%s", exc)
            return []

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.error("Error loading projects from %s: %s", path, exc)
            return []

        if not isinstance(raw, list):
            logger.error("Expected a JSON array in %s, got %s", path, type(raw).__name__)
            return []

        projects: list[Project] = []
        for entry in raw:
            try:
                projects.append(Project.model_validate(entry))
            except ValidationError as exc:
                logger.error("Skipping invalid project entry in %s: %s", path, exc)
        return projects

    def load_project_by_id(self, project_id: str, locale: str) -> Project | None:
        """Find a project by id. Returns ``None`` when it does not exist."""
        for project in self.load_projects(locale):
            if project.id == project_id:
                return project
        return None
