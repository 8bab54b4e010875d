"""DTOs for site navigation (header menus and footer link groups)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NavLink:
    label: str
    url: str


@dataclass(frozen=True)
class NavMenu:
    """Header entry; a non-empty children tuple renders as a dropdown."""

    label: str
    url: str
    children: tuple[NavLink, ...] = ()


@dataclass(frozen=True)
class FooterSection:
    title: str
    links: tuple[NavLink, ...]


@dataclass(frozen=True)
class SiteNavigation:
    """Everything the site layout needs around a page.

    header: one menu per listed apartado;
    about: dropdown for about/faq apartados that do not list categorias;
    footer: one group per apartado listing categorias, then legal links.
    """

    header: tuple[NavMenu, ...]
    about: tuple[NavLink, ...]
    footer: tuple[FooterSection, ...]
