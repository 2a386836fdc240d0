from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class LocaleInfo(BaseModel):
    """Display data for a single supported locale."""

    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    flag: str
    rtl: bool = False

    @property
    def direction(self) -> Literal["ltr", "rtl"]:
        return "rtl" if self.rtl else "ltr"


class ContentDocument(BaseModel):
    """A markdown file split into frontmatter metadata and body text."""

    model_config = ConfigDict(frozen=True)

    slug: str
    frontmatter: dict[str, Any] = Field(default_factory=dict)
    body: str = ""

    @property
    def title(self) -> Optional[str]:
        value = self.frontmatter.get("title")
        return str(value) if value else None

    def title_or(self, default: str) -> str:
        """Return the frontmatter title, or *default* when it is absent."""
        return self.title or default


class Project(BaseModel):
    """A single portfolio project as stored in ``projects.json``.

    JSON keys are camelCase (``longDescription``); attributes are snake_case.
    Unknown keys in the catalog are ignored.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str
    name: str
    description: str = ""
    long_description: Optional[str] = Field(default=None, alias="longDescription")
    tech: list[str] = Field(default_factory=list)
    github: Optional[str] = None
    gitlab: Optional[str] = None
    demo: Optional[str] = None
    apk: Optional[str] = None
    image: Optional[str] = None
    featured: bool = False
    year: Optional[str] = None


class StaticParam(BaseModel):
    """One ``(locale, id)`` pair a static build must emit a detail page for."""

    model_config = ConfigDict(frozen=True)

    locale: str
    id: str


class ContactSubmission(BaseModel):
    """Payload accepted by the contact endpoint.

    Fields default to empty strings so that presence checks happen in
    contact_service rather than as framework-level 422s.
    """

    name: str = ""
    email: str = ""
    message: str = ""
    # Hidden form field; real visitors leave it empty.
    honeypot: str = ""


class ContactResponse(BaseModel):
    """Successful response from /api/contact."""

    success: bool
    message: str


class LanguageOption(BaseModel):
    """Entry returned by GET /i18n for the language picker."""

    code: str
    name: str
    flag: str
    direction: Literal["ltr", "rtl"]
    href: str = ""
