"""Domain enumerations for site content.

Enums represent closed sets of domain values: entity kinds, backend
template identifiers, section type tags, the rendering variants they
dispatch to, and the states of a page resolution.
"""

from enum import Enum


class EntityKind(str, Enum):
    """The four levels of the content tree, top to bottom."""

    APARTADO = "apartado"
    CATEGORIA = "categoria"
    SECCION = "seccion"
    CONTENIDO = "contenido"

    @classmethod
    def values(cls) -> list[str]:
        """Return all kind values as strings."""
        return [kind.value for kind in cls]


# Parent kind -> child kind (strict 4-level tree).
CHILD_KIND: dict[EntityKind, EntityKind] = {
    EntityKind.APARTADO: EntityKind.CATEGORIA,
    EntityKind.CATEGORIA: EntityKind.SECCION,
    EntityKind.SECCION: EntityKind.CONTENIDO,
}

PARENT_KIND: dict[EntityKind, EntityKind] = {
    child: parent for parent, child in CHILD_KIND.items()
}


class PageTemplate(str, Enum):
    """Template identifiers assigned to apartados by the backend (UUIDs)."""

    HOME = "b04f6bcf-33c5-41ee-9454-98302bfbc930"
    BLOG = "2c9a6d51-3965-4383-ad3a-784bc5794545"
    CATEGORY = "d55bd5d7-876f-4a11-8b1b-6acd83aa3407"
    PRICING = "50d449f8-0143-46f1-baeb-f43c66193898"
    ABOUT = "d3492653-a06e-4bf7-a4cf-b932b756da12"
    FAQ = "c7636b14-2c44-48f9-a68d-46d1d19fc38c"
    TERMS = "d06799f2-5a41-49e4-bc6e-b71ef25460fd"
    PRIVACY = "67537c80-0fcb-45d5-863b-ca8c2ce32d53"

    @classmethod
    def parse(cls, value: str | None) -> "PageTemplate | None":
        """Return the template for a raw id (case-insensitive), or None if unknown."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class PageVariant(str, Enum):
    """Page-level rendering variants. FEATURE_LIST is the default layout."""

    FEATURE_LIST = "feature_list"
    BLOG = "blog"
    BLOG_POST = "blog_post"
    CATEGORY = "category"
    PRICING = "pricing"
    ABOUT = "about"
    FAQ = "faq"
    TERMS = "terms"
    PRIVACY = "privacy"


class SectionType(str, Enum):
    """Section type tags stored on secciones by the backend."""

    GENERAL = "General"
    CARDS = "Cards"
    CARDS_SIDE = "CardsSide"
    GALLERY = "Gallery"
    GALLERY_ROUNDED = "GalleryRounded"
    TABS = "Tabs"
    INFO_BOXES = "InfoBoxes"

    @classmethod
    def parse(cls, value: str | None) -> "SectionType | None":
        """Return the section type for a raw tag (case-insensitive), or None if unknown."""
        if not value:
            return None
        return _SECTION_TYPE_BY_TAG.get(value.strip().lower())


_SECTION_TYPE_BY_TAG: dict[str, SectionType] = {
    member.value.lower(): member for member in SectionType
}


class SectionVariant(str, Enum):
    """Section-level rendering variants. GENERAL is the default layout."""

    GENERAL = "general"
    CARDS = "cards"
    CARDS_WITH_MEDIA = "cards_with_media"
    GALLERY = "gallery"
    GALLERY_GRID = "gallery_grid"
    TABS = "tabs"
    INFO_BOXES = "info_boxes"


class ResolutionStatus(str, Enum):
    """States of one page resolution (one navigation event).

    RESOLVING -> LOADING_CHILDREN -> LOADING_GRANDCHILDREN -> READY, with
    NOT_FOUND and ERROR reachable from any non-terminal state.
    """

    RESOLVING = "resolving"
    LOADING_CHILDREN = "loading_children"
    LOADING_GRANDCHILDREN = "loading_grandchildren"
    READY = "ready"
    NOT_FOUND = "not_found"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        """Return True for READY, NOT_FOUND and ERROR."""
        return self in (
            ResolutionStatus.READY,
            ResolutionStatus.NOT_FOUND,
            ResolutionStatus.ERROR,
        )
