"""SlugResolver: name match first, reserved alias second, home slug default."""

import pytest

from site_content.application.services import SlugResolver, normalize_slug
from site_content.domain.entities import Apartado
from site_content.domain.enums import PageTemplate


def _apartado(apartado_id: str, name: str, template: PageTemplate, active: bool = True) -> Apartado:
    return Apartado(id=apartado_id, name=name, template_id=template.value, active=active)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, "inicio"),
        ("", "inicio"),
        ("   ", "inicio"),
        ("Blog", "blog"),
        ("/nosotros/", "nosotros"),
        ("/", "inicio"),
        (" / ", "inicio"),
    ],
)
def test_normalize_slug(raw, expected) -> None:
    assert normalize_slug(raw) == expected


def test_name_match_is_case_insensitive() -> None:
    blog = _apartado("a1", "Blog", PageTemplate.BLOG)
    assert SlugResolver().resolve("BLOG", [blog]) is blog


def test_alias_resolves_by_template_when_no_name_matches() -> None:
    about = _apartado("a1", "Quienes somos", PageTemplate.ABOUT)
    assert SlugResolver().resolve("nosotros", [about]) is about


def test_name_wins_over_alias() -> None:
    """An apartado literally named 'faq' shadows the FAQ template alias."""
    named = _apartado("named", "faq", PageTemplate.BLOG)
    templated = _apartado("templated", "Preguntas", PageTemplate.FAQ)
    assert SlugResolver().resolve("faq", [templated, named]) is named


def test_alias_without_matching_template_is_not_found() -> None:
    blog = _apartado("a1", "Blog", PageTemplate.BLOG)
    assert SlugResolver().resolve("terminos", [blog]) is None


def test_unknown_slug_is_not_found() -> None:
    assert SlugResolver().resolve("no-existe", [_apartado("a1", "Blog", PageTemplate.BLOG)]) is None


def test_missing_slug_resolves_home() -> None:
    home = _apartado("h", "Portada", PageTemplate.HOME)
    assert SlugResolver().resolve(None, [home]) is home


def test_custom_home_slug() -> None:
    landing = _apartado("l", "landing", PageTemplate.BLOG)
    resolver = SlugResolver(home_slug="landing")
    assert resolver.resolve("", [landing]) is landing


def test_inactive_apartados_are_skipped_for_public_routing() -> None:
    hidden = _apartado("a1", "Blog", PageTemplate.BLOG, active=False)
    assert SlugResolver().resolve("blog", [hidden]) is None
    assert SlugResolver(public_only=False).resolve("blog", [hidden]) is hidden


def test_first_candidate_in_collection_order_wins() -> None:
    first = _apartado("a1", "Blog", PageTemplate.BLOG)
    second = _apartado("a2", "blog", PageTemplate.BLOG)
    assert SlugResolver().resolve("blog", [first, second]) is first


def test_alias_template_lookup() -> None:
    resolver = SlugResolver()
    assert resolver.alias_template("Politicas") is PageTemplate.PRIVACY
    assert resolver.alias_template("blog") is None


def test_nosotros_prefers_apartado_named_nosotros() -> None:
    about_template = _apartado("t", "Equipo", PageTemplate.ABOUT)
    named = _apartado("n", "Nosotros", PageTemplate.HOME)
    assert SlugResolver().resolve("nosotros", [about_template, named]) is named


def test_blank_name_never_matches() -> None:
    blank = _apartado("b", "  ", PageTemplate.BLOG)
    home = _apartado("h", "Inicio", PageTemplate.BLOG)
    assert SlugResolver().resolve("/", [blank]) is None
    assert SlugResolver().resolve("/", [blank, home]) is home
