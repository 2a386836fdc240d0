"""FastAPI application entry point.

Serves the server-rendered portfolio pages for every locale plus a small
JSON API. Handlers are thin: content loading lives in content_service.py
and project_service.py, URL construction in routing.py, HTML in
render_service.py.

Run with:
    uvicorn portfolio.main:app --reload --port 8000
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional
from urllib.parse import unquote

from fastapi import Depends, FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from fastapi.staticfiles import StaticFiles

from portfolio import contact_service, i18n_service, render_service
from portfolio.config import Settings, settings as default_settings
from portfolio.errors import ContactValidationError, ContentNotFound, UnknownLocale
from portfolio.models import ContactResponse, ContactSubmission, LanguageOption
from portfolio.routing import Route
from portfolio.site import Site, build_site

logger = logging.getLogger(__name__)

LOCALE_COOKIE = "locale"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def get_site(request: Request) -> Site:
    """FastAPI dependency returning the shared, read-only Site."""
    return request.app.state.site


# ── Helpers ───────────────────────────────────────────────────────────────────


def _page(html: str, locale: str, status_code: int = 200) -> HTMLResponse:
    response = HTMLResponse(content=html, status_code=status_code)
    response.set_cookie(LOCALE_COOKIE, locale, samesite="lax")
    return response


def _canonical_redirect(
    request: Request,
    site: Site,
    locale: str,
    route: Route,
    project_id: Optional[str] = None,
) -> Optional[RedirectResponse]:
    """Redirect to the canonical path when the request used another form.

    Only the locale prefix is compared; trailing slashes are left to the
    router so the two URL schemes cannot redirect into each other.
    ``request.url.path`` is already percent-decoded, so the canonical path
    is decoded before comparing.
    """
    canonical = site.paths.href(locale, route, project_id)
    if unquote(canonical).rstrip("/") == request.url.path.rstrip("/"):
        return None
    target = canonical
    if request.url.query:
        target = f"{canonical}?{request.url.query}"
    return RedirectResponse(url=target, status_code=308)


def _resolve_locale(request: Request, site: Site) -> str:
    """Locale from the ``{locale}`` path segment, or the default when unprefixed.

    Raises:
        UnknownLocale: if the path segment is not a supported locale.
    """
    locale = request.path_params.get("locale")
    if locale is None:
        return site.registry.default
    return site.registry.validate_code(locale)


# ── Page handlers ─────────────────────────────────────────────────────────────


async def home_page(request: Request, site: Site = Depends(get_site)) -> Response:
    """Home page. First-time visitors to ``/`` are sent to their browser's locale."""
    if "locale" not in request.path_params and LOCALE_COOKIE not in request.cookies:
        detected = site.registry.negotiate(request.headers.get("accept-language"))
        if detected != site.registry.default:
            return RedirectResponse(url=site.paths.href(detected, Route.HOME), status_code=307)

    code = _resolve_locale(request, site)
    redirect = _canonical_redirect(request, site, code, Route.HOME)
    if redirect:
        return redirect
    return _page(render_service.render_home(site, code), code)


async def about_page(request: Request, site: Site = Depends(get_site)) -> Response:
    code = _resolve_locale(request, site)
    redirect = _canonical_redirect(request, site, code, Route.ABOUT)
    if redirect:
        return redirect
    return _page(render_service.render_about(site, code), code)


async def projects_page(
    request: Request,
    tech: Optional[str] = None,
    site: Site = Depends(get_site),
) -> Response:
    """Project listing; ``?tech=`` narrows it to one technology."""
    code = _resolve_locale(request, site)
    redirect = _canonical_redirect(request, site, code, Route.PROJECTS)
    if redirect:
        return redirect
    return _page(render_service.render_projects(site, code, tech), code)


async def project_detail_page(
    request: Request, project_id: str, site: Site = Depends(get_site)
) -> Response:
    """Project detail; unknown ids render the not-found page with a 404."""
    code = _resolve_locale(request, site)
    redirect = _canonical_redirect(request, site, code, Route.PROJECT_DETAIL, project_id)
    if redirect:
        return redirect
    html = render_service.render_project_detail(site, code, project_id)
    if html is None:
        return _page(render_service.render_not_found(site, code), code, status_code=404)
    return _page(html, code)


async def contact_page(request: Request, site: Site = Depends(get_site)) -> Response:
    code = _resolve_locale(request, site)
    redirect = _canonical_redirect(request, site, code, Route.CONTACT)
    if redirect:
        return redirect
    return _page(render_service.render_contact(site, code), code)


async def contact_form(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    message: str = Form(""),
    honeypot: str = Form(""),
    site: Site = Depends(get_site),
) -> Response:
    """Server-rendered form post; re-renders the page with a status banner."""
    code = _resolve_locale(request, site)
    submission = ContactSubmission(name=name, email=email, message=message, honeypot=honeypot)
    try:
        contact_service.submit(submission)
    except ContactValidationError as exc:
        html = render_service.render_contact(
            site, code, form=submission, status="error", error_key=exc.code
        )
        return _page(html, code, status_code=400)
    return _page(render_service.render_contact(site, code, status="success"), code)


# ── Application factory ───────────────────────────────────────────────────────


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application around a freshly constructed Site."""
    app_settings = app_settings or default_settings
    site = build_site(app_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan — configure logging and report the URL scheme."""
        configure_logging(app_settings.log_level)
        logger.info(
            "Serving %d locales from %s (%s URLs).",
            len(site.registry.codes),
            app_settings.content_dir,
            "static" if site.paths.static_export else "dynamic",
        )
        yield

    app = FastAPI(
        title="Portfolio",
        description="Server-rendered, multilingual personal portfolio.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.site = site

    if app_settings.static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(app_settings.static_dir)), name="static")

    @app.exception_handler(UnknownLocale)
    async def unknown_locale_handler(request: Request, exc: UnknownLocale) -> HTMLResponse:
        logger.info("Unknown locale requested: %s", exc.code)
        return HTMLResponse(render_service.render_not_found(site), status_code=404)

    @app.exception_handler(ContentNotFound)
    async def content_not_found_handler(request: Request, exc: ContentNotFound) -> HTMLResponse:
        logger.warning("%s", exc)
        return HTMLResponse(render_service.render_not_found(site, exc.locale), status_code=404)

    # ── System ────────────────────────────────────────────────────────────────

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Confirm the server is running."""
        return {"status": "ok"}

    @app.get("/i18n", tags=["system"])
    async def list_languages() -> list[LanguageOption]:
        """Return the language picker options."""
        return i18n_service.get_supported_languages(site.paths)

    @app.get("/i18n/{locale}", tags=["system"])
    async def get_messages(locale: str) -> dict[str, object]:
        """Return the UI message bundle for a supported locale."""
        if not site.registry.is_supported(locale):
            raise HTTPException(status_code=404, detail=f"Unsupported locale: {locale}")
        return i18n_service.load_messages(locale, site.messages_root, site.registry)

    # ── Contact API ───────────────────────────────────────────────────────────

    @app.post("/api/contact", response_model=ContactResponse, tags=["contact"])
    async def api_contact(submission: ContactSubmission) -> ContactResponse | JSONResponse:
        """Validate a contact submission and log it.

        Returns HTTP 400 with ``{"error": ...}`` when validation fails.
        Honeypot submissions are accepted and dropped.
        """
        try:
            return contact_service.submit(submission)
        except ContactValidationError as exc:
            return JSONResponse({"error": exc.detail}, status_code=400)

    # ── Pages ─────────────────────────────────────────────────────────────────
    # Unprefixed routes first so "/about" never matches "/{locale}".

    for prefix in ("", "/{locale}"):
        app.add_api_route(f"{prefix}/about", about_page, methods=["GET"], tags=["pages"])
        app.add_api_route(f"{prefix}/projects", projects_page, methods=["GET"], tags=["pages"])
        app.add_api_route(
            f"{prefix}/projects/{{project_id}}",
            project_detail_page,
            methods=["GET"],
            tags=["pages"],
        )
        app.add_api_route(f"{prefix}/contact", contact_page, methods=["GET"], tags=["pages"])
        app.add_api_route(f"{prefix}/contact", contact_form, methods=["POST"], tags=["pages"])
    app.add_api_route("/", home_page, methods=["GET"], tags=["pages"])
    app.add_api_route("/{locale}", home_page, methods=["GET"], tags=["pages"])

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: Exception) -> Response:
        if request.url.path.startswith(("/api/", "/i18n/")):
            detail = getattr(exc, "detail", "Not Found")
            return JSONResponse({"detail": detail}, status_code=404)
        segments = [s for s in request.url.path.split("/") if s]
        locale = segments[0] if segments else None
        return HTMLResponse(render_service.render_not_found(site, locale), status_code=404)

    return app


app = create_app()
