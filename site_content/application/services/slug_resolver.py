"""Slug resolver: route slug -> top-level apartado.

Resolution order:
1. case-insensitive match on apartado name;
2. if none and the slug is a reserved alias, match on the alias template id;
3. otherwise not found (callers render a 404 and do not retry).

Tenant-chosen names take priority over reserved aliases.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from site_content.core.constants import DEFAULT_HOME_SLUG, RESERVED_ALIASES
from site_content.domain.entities import Apartado
from site_content.domain.enums import PageTemplate

logger = logging.getLogger(__name__)


def normalize_slug(slug: str | None, home_slug: str = DEFAULT_HOME_SLUG) -> str:
    """Return the lookup form of a route slug; empty or missing means home."""
    cleaned = (slug or "").strip().strip("/").strip().lower()
    return cleaned or home_slug.strip().lower()


class SlugResolver:
    """Maps route slugs to apartados by name, then by reserved alias."""

    def __init__(
        self,
        aliases: Mapping[str, PageTemplate] | None = None,
        home_slug: str = DEFAULT_HOME_SLUG,
        public_only: bool = True,
    ) -> None:
        """Initialize the resolver.

        Args:
            aliases: Reserved slug -> template map; defaults to RESERVED_ALIASES.
            home_slug: Slug assumed when the route carries none.
            public_only: Skip inactive apartados (public site traversal).
        """
        self._aliases = {
            key.lower(): value
            for key, value in (RESERVED_ALIASES if aliases is None else aliases).items()
        }
        self.home_slug = home_slug
        self._public_only = public_only

    def alias_template(self, slug: str | None) -> PageTemplate | None:
        """Template reserved for slug, or None when slug is not an alias."""
        return self._aliases.get(normalize_slug(slug, self.home_slug))

    def resolve(self, slug: str | None, apartados: Iterable[Apartado]) -> Apartado | None:
        """Return the apartado for slug, or None when nothing matches.

        Among several candidates the first in collection order wins.
        """
        target = normalize_slug(slug, self.home_slug)
        candidates = [a for a in apartados if a.active or not self._public_only]

        for apartado in candidates:
            name = apartado.name.strip().lower()
            if name and name == target:
                return apartado

        template = self._aliases.get(target)
        if template is None:
            logger.info("Slug not found: %s", target)
            return None
        for apartado in candidates:
            if apartado.template is template:
                logger.debug("Slug %s resolved by alias to template %s", target, template.name)
                return apartado
        logger.info("Slug not found: %s (alias %s has no apartado)", target, template.name)
        return None
