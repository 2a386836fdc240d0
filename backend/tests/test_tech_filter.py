"""Unit tests for technology tag derivation and filtering."""

import pytest

from portfolio.models import Project
from portfolio.tech_filter import filter_by_tech, unique_techs


def _project(pid: str, *tech: str) -> Project:
    return Project(id=pid, name=pid.title(), description="", tech=list(tech))


PROJECTS = [
    _project("a", "Python", "FastAPI"),
    _project("b", "TypeScript", "React", "Python"),
    _project("c", "python", "Flutter"),
    _project("d"),
]


class TestUniqueTechs:
    def test_sorted_and_deduplicated(self) -> None:
        assert unique_techs(PROJECTS) == [
            "FastAPI",
            "Flutter",
            "Python",
            "React",
            "TypeScript",
            "python",
        ]

    def test_empty_input(self) -> None:
        assert unique_techs([]) == []

    def test_no_duplicates(self) -> None:
        techs = unique_techs(PROJECTS)
        assert len(techs) == len(set(techs))
        assert techs == sorted(techs)


class TestFilterByTech:
    def test_none_is_identity(self) -> None:
        assert filter_by_tech(PROJECTS, None) == PROJECTS

    def test_empty_string_is_identity(self) -> None:
        assert filter_by_tech(PROJECTS, "") == PROJECTS

    def test_exact_match(self) -> None:
        assert [p.id for p in filter_by_tech(PROJECTS, "Python")] == ["a", "b"]

    def test_case_sensitive(self) -> None:
        assert [p.id for p in filter_by_tech(PROJECTS, "python")] == ["c"]

    def test_no_partial_match(self) -> None:
        assert filter_by_tech(PROJECTS, "Py") == []

    def test_unknown_tag_is_empty_not_error(self) -> None:
        assert filter_by_tech(PROJECTS, "Rust") == []

    @pytest.mark.parametrize("tag", ["Python", "React", "Flutter", "Rust"])
    def test_idempotent(self, tag: str) -> None:
        once = filter_by_tech(PROJECTS, tag)
        assert filter_by_tech(once, tag) == once

    def test_preserves_order(self) -> None:
        reordered = list(reversed(PROJECTS))
        assert [p.id for p in filter_by_tech(reordered, "Python")] == ["b", "a"]
