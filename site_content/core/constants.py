"""Core constants: reserved routing aliases and shared literal values.

Single source of truth for slugs that route by template instead of by
apartado name.
"""

from site_content.domain.enums import PageTemplate

# Parent key for the top-level collection (apartados have no parent entity).
ROOT_PARENT_ID = "__root__"

# Default slug when the route carries none.
DEFAULT_HOME_SLUG = "inicio"

# Reserved slug -> template. Used only when no apartado name matches the slug.
RESERVED_ALIASES: dict[str, PageTemplate] = {
    "inicio": PageTemplate.HOME,
    "home": PageTemplate.HOME,
    "nosotros": PageTemplate.ABOUT,
    "about": PageTemplate.ABOUT,
    "faq": PageTemplate.FAQ,
    "terminos": PageTemplate.TERMS,
    "terms": PageTemplate.TERMS,
    "politicas": PageTemplate.PRIVACY,
    "privacy": PageTemplate.PRIVACY,
}
