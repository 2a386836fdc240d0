"""Tests for template environment and markdown rendering."""

from portfolio.config import BASE_DIR
from portfolio.render_service import create_environment, render_markdown, render_projects
from portfolio.site import Site


class TestEnvironment:
    def test_one_environment_per_templates_dir(self) -> None:
        templates = BASE_DIR / "templates"
        assert create_environment(templates) is create_environment(templates)

    def test_pages_share_the_environment(self, site: Site) -> None:
        env = create_environment(site.settings.templates_dir)
        render_projects(site, "en")
        assert create_environment(site.settings.templates_dir) is env
        assert env.get_template("projects.html") is env.get_template("projects.html")


class TestRenderMarkdown:
    def test_extra_tables(self) -> None:
        html = render_markdown("| a |\n|---|\n| 1 |")
        assert "<table>" in html

    def test_empty_text(self) -> None:
        assert render_markdown("") == ""
