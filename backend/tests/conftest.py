"""Shared fixtures: a throwaway content tree and a Site built on top of it."""

import json
from pathlib import Path

import pytest

from portfolio.config import BASE_DIR, Settings
from portfolio.content_service import ContentRepository
from portfolio.locales import LocaleRegistry, default_registry
from portfolio.site import Site, build_site

EN_PROJECTS = [
    {
        "id": "alpha",
        "name": "Alpha",
        "description": "First project",
        "longDescription": "Alpha **long** description",
        "tech": ["Python", "FastAPI"],
        "featured": True,
        "year": "2025",
    },
    {
        "id": "beta",
        "name": "Beta",
        "description": "Second project",
        "tech": ["TypeScript", "Next.js"],
        "featured": False,
    },
    {
        "id": "gamma",
        "name": "Gamma",
        "description": "Third project",
        "tech": ["Python", "Flutter"],
        "featured": True,
    },
    {
        "id": "delta",
        "name": "Delta",
        "description": "Fourth project",
        "tech": ["Dart", "Flutter"],
        "featured": True,
    },
    {
        "id": "epsilon",
        "name": "Epsilon",
        "description": "Fifth project",
        "tech": ["Go"],
        "featured": True,
    },
]

FR_PROJECTS = [
    {"id": "alpha", "name": "Alpha (fr)", "description": "Premier projet", "tech": ["Python"]},
    {"id": "beta", "name": "Bêta", "description": "Deuxième projet", "tech": ["TypeScript"]},
]


def write_json(path: Path, data: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


@pytest.fixture
def registry() -> LocaleRegistry:
    return default_registry()


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    """en and fr catalogs; es, ar and tr have no projects.json."""
    root = tmp_path / "content"
    write_json(root / "en" / "projects.json", EN_PROJECTS)
    write_json(root / "fr" / "projects.json", FR_PROJECTS)
    write_text(
        root / "en" / "about.md",
        "---\ntitle: About me\ndescription: Who I am\ntags:\n  - python\n---\n\n## Hello\n\nBody text.\n",
    )
    write_text(root / "fr" / "about.md", "---\ntitle: À propos\n---\nBonjour.\n")
    write_text(root / "en" / "home.md", "---\ntitle: Welcome home\n---\nIntro **text**.\n")
    write_text(root / "ar" / "home.md", "---\ntitle: مرحبا\n---\nنص.\n")
    return root


@pytest.fixture
def messages_root(tmp_path: Path) -> Path:
    root = tmp_path / "messages"
    write_json(
        root / "en.json",
        {
            "nav": {"home": "Home", "about": "About", "projects": "Projects", "contact": "Contact"},
            "projects": {"title": "Projects", "empty": "No projects yet."},
            "contact": {
                "success": "Thanks!",
                "errors": {"invalid_email": "Bad email."},
            },
            "not_found": {"title": "Page not found"},
        },
    )
    write_json(
        root / "fr.json",
        {"nav": {"home": "Accueil", "about": "À propos"}, "projects": {"title": "Projets"}},
    )
    return root


@pytest.fixture
def repository(content_root: Path, registry: LocaleRegistry) -> ContentRepository:
    return ContentRepository(content_root, registry)


@pytest.fixture
def make_settings(content_root: Path, messages_root: Path, tmp_path: Path):
    """Factory for Settings pointing at the temporary content tree."""

    def _make(**overrides: object) -> Settings:
        values: dict[str, object] = {
            "content_dir": content_root,
            "messages_dir": messages_root,
            "templates_dir": BASE_DIR / "templates",
            "static_dir": BASE_DIR / "static",
            "export_dir": tmp_path / "out",
            "deploy_target": "server",
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def site(make_settings) -> Site:
    return build_site(make_settings())


@pytest.fixture
def static_site(make_settings) -> Site:
    return build_site(make_settings(deploy_target="static"))


UNICODE_ID = "café app"


@pytest.fixture
def unicode_settings(make_settings, tmp_path: Path):
    """Settings over a catalog whose project id needs percent-encoding."""
    root = tmp_path / "unicode-content"
    write_json(
        root / "en" / "projects.json",
        [{"id": UNICODE_ID, "name": "Café App", "description": "Menu board", "tech": ["Dart"]}],
    )
    return lambda **overrides: make_settings(content_dir=root, **overrides)
