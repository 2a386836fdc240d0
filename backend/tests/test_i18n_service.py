"""Unit tests for message bundle loading and lookup."""

from pathlib import Path

from portfolio.i18n_service import get_supported_languages, load_messages, translate
from portfolio.locales import LocaleRegistry
from portfolio.routing import PathBuilder

from conftest import write_text


class TestLoadMessages:
    def test_requested_bundle(self, messages_root: Path, registry: LocaleRegistry) -> None:
        assert load_messages("fr", messages_root, registry)["nav"]["home"] == "Accueil"

    def test_missing_bundle_falls_back_to_default(
        self, messages_root: Path, registry: LocaleRegistry
    ) -> None:
        assert load_messages("es", messages_root, registry)["nav"]["home"] == "Home"

    def test_unsupported_locale_uses_default(
        self, messages_root: Path, registry: LocaleRegistry
    ) -> None:
        assert load_messages("xx", messages_root, registry)["nav"]["home"] == "Home"

    def test_corrupt_bundle_falls_back(self, messages_root: Path, registry: LocaleRegistry) -> None:
        write_text(messages_root / "tr.json", "{broken")
        assert load_messages("tr", messages_root, registry)["nav"]["home"] == "Home"

    def test_nothing_available_is_empty(self, tmp_path: Path, registry: LocaleRegistry) -> None:
        assert load_messages("fr", tmp_path / "none", registry) == {}


class TestTranslate:
    MESSAGES = {"nav": {"about": "About"}, "count": 3, "list": ["a"]}

    def test_nested_key(self) -> None:
        assert translate(self.MESSAGES, "nav.about") == "About"

    def test_missing_key_returns_key(self) -> None:
        assert translate(self.MESSAGES, "nav.blog") == "nav.blog"

    def test_missing_key_with_default(self) -> None:
        assert translate(self.MESSAGES, "nav.blog", "Blog") == "Blog"

    def test_non_string_leaf_is_stringified(self) -> None:
        assert translate(self.MESSAGES, "count") == "3"

    def test_branch_is_not_a_translation(self) -> None:
        assert translate(self.MESSAGES, "nav", "x") == "x"
        assert translate(self.MESSAGES, "list", "y") == "y"


class TestSupportedLanguages:
    def test_options_with_home_links(self, registry: LocaleRegistry) -> None:
        options = get_supported_languages(PathBuilder(registry=registry))
        assert [o.code for o in options] == registry.codes
        arabic = next(o for o in options if o.code == "ar")
        assert arabic.direction == "rtl"
        assert arabic.href == "/ar"
        assert options[0].href == "/"
