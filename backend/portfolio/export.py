"""Static export: render every page for every locale into a directory tree.

Pages are written directory-style (``/fr/about/`` → ``fr/about/index.html``)
using the static URL scheme, so the output can be served by any static host.

Usage:
    python -m portfolio.export --out ./out
"""

import argparse
import logging
import shutil
from pathlib import Path
from urllib.parse import unquote

from portfolio import render_service
from portfolio.config import Settings, settings as default_settings
from portfolio.routing import NAV_ROUTES, Route
from portfolio.site import Site, build_site

logger = logging.getLogger(__name__)

_PAGE_RENDERERS = {
    Route.HOME: render_service.render_home,
    Route.ABOUT: render_service.render_about,
    Route.PROJECTS: render_service.render_projects,
    Route.CONTACT: render_service.render_contact,
}


def output_path(out_dir: Path, href: str) -> Path:
    """Map a static href such as ``/fr/about/`` to its ``index.html`` file.

    Static hosts decode the request path before looking up files, so
    percent-encoded ids are written under their decoded names.
    """
    relative = unquote(href.strip("/"))
    return out_dir / relative / "index.html" if relative else out_dir / "index.html"


def _write(out_dir: Path, href: str, html: str) -> Path:
    path = output_path(out_dir, href)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    return path


def export_site(site: Site, out_dir: Path, clean: bool = True) -> list[Path]:
    """Render all pages of *site* into *out_dir*.

    Args:
        site: A Site built with ``static_export=True``.
        out_dir: Destination directory.
        clean: Remove *out_dir* first when it exists.

    Returns:
        Every file written, in write order.

    Raises:
        ValueError: if *site* uses the dynamic URL scheme.
    """
    if not site.paths.static_export:
        raise ValueError("export_site requires a Site built for static export")

    if clean and out_dir.exists():
        shutil.rmtree(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for locale in site.registry.codes:
        for route in NAV_ROUTES:
            html = _PAGE_RENDERERS[route](site, locale)
            written.append(_write(out_dir, site.paths.href(locale, route), html))

    for param in site.projects.static_params():
        html = render_service.render_project_detail(site, param.locale, param.id)
        if html is None:
            logger.warning("Project %r vanished while exporting %s.", param.id, param.locale)
            continue
        href = site.paths.href(param.locale, Route.PROJECT_DETAIL, param.id)
        written.append(_write(out_dir, href, html))

    not_found = out_dir / "404.html"
    not_found.write_text(render_service.render_not_found(site), encoding="utf-8")
    written.append(not_found)

    static_dir = site.settings.static_dir
    if static_dir.is_dir():
        shutil.copytree(static_dir, out_dir / "static", dirs_exist_ok=True)

    logger.info("Exported %d pages to %s.", len(written), out_dir)
    return written


def main(argv: list[str] | None = None, app_settings: Settings | None = None) -> int:
    parser = argparse.ArgumentParser(description="Export the portfolio as static HTML.")
    parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output directory (defaults to EXPORT_DIR / ./out).",
    )
    parser.add_argument(
        "--no-clean",
        action="store_true",
        help="Keep existing files in the output directory.",
    )
    args = parser.parse_args(argv)

    app_settings = app_settings or default_settings
    logging.basicConfig(
        level=app_settings.log_level.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    site = build_site(app_settings, static_export=True)
    out_dir = args.out or app_settings.export_dir
    export_site(site, out_dir, clean=not args.no_clean)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
