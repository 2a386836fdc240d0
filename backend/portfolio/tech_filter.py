"""Technology tag derivation and filtering for the project listing."""

from collections.abc import Iterable, Sequence

from portfolio.models import Project


def unique_techs(projects: Iterable[Project]) -> list[str]:
    """Gather every tag across all projects, deduplicated and sorted.

    Sorting is by code point so the order does not depend on the process
    locale.
    """
    techs: set[str] = set()
    for project in projects:
        techs.update(project.tech)
    return sorted(techs)


def filter_by_tech(projects: Sequence[Project], tag: str | None) -> list[Project]:
    """Keep projects whose ``tech`` list contains *tag* exactly.

    ``None`` (or an empty string from a cleared query parameter) returns the
    input unchanged. Matching is case-sensitive with no partial matches; an
    unknown tag yields an empty list.
    """
    if not tag:
        return list(projects)
    return [p for p in projects if tag in p.tech]
