"""Hierarchy loader: slug -> fully hydrated apartado subtree.

Each navigation runs a small state machine:

    RESOLVING -> LOADING_CHILDREN -> LOADING_GRANDCHILDREN -> READY
    (NOT_FOUND / ERROR reachable from any non-terminal state)

Every call to resolve() takes a new generation number. Intermediate and
final states are published as the visible state only while their
generation is the latest, so a slow navigation that finishes after a
newer one never flips the visible page back. Its fetches still merge into
the cache (merges are keyed by parent id and therefore harmless).

Grandchild failures (secciones of one categoria, contenidos of one
seccion) degrade to empty lists and are recorded on the resolution;
top-level and categoria failures end the navigation in ERROR.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping

from site_content.application.dtos.page import (
    PageResolution,
    PartialDegradation,
    ResolvedPage,
)
from site_content.application.interfaces.services import IContentApi
from site_content.application.services.children_cache import ChildrenCache
from site_content.application.services.entity_store import EntityStore
from site_content.application.services.slug_resolver import SlugResolver, normalize_slug
from site_content.core.constants import ROOT_PARENT_ID
from site_content.domain.entities import Apartado, Categoria, Contenido, Seccion
from site_content.domain.enums import EntityKind, ResolutionStatus
from site_content.domain.exceptions import (
    ResourceNotFoundException,
    SiteContentException,
    SlugNotFoundException,
)
from site_content.shared.telemetry.tracing import add_span_attributes, add_span_event, traced

logger = logging.getLogger(__name__)

Listener = Callable[[PageResolution], None]


class HierarchyLoader:
    """Resolves slugs into ResolvedPage trees over the shared cache."""

    def __init__(
        self,
        store: EntityStore,
        caches: Mapping[EntityKind, ChildrenCache],
        resolver: SlugResolver | None = None,
        api: IContentApi | None = None,
    ) -> None:
        """Initialize the loader.

        Args:
            store: Shared entity store (read for orphan checks).
            caches: Children caches keyed by child kind (see build_children_caches).
            resolver: Slug resolver; defaults to reserved aliases and 'inicio' as home.
            api: Content API for single-categoria lookups (resolve_categoria).
        """
        self._store = store
        self._caches = caches
        self._resolver = resolver or SlugResolver()
        self._api = api
        self._generation = 0
        self._visible: PageResolution | None = None
        self._listeners: list[Listener] = []

    @property
    def generation(self) -> int:
        """Generation of the latest navigation."""
        return self._generation

    @property
    def state(self) -> PageResolution | None:
        """Visible state: the latest navigation's most recent transition."""
        return self._visible

    def is_current(self, resolution: PageResolution) -> bool:
        """True when resolution belongs to the latest navigation."""
        return resolution.generation == self._generation

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener on every visible transition. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @traced("hierarchy_loader.resolve")
    async def resolve(self, slug: str | None = None, refresh: bool = False) -> PageResolution:
        """Run one navigation and return its terminal resolution.

        The returned resolution is this navigation's own outcome; check
        is_current() (or read state) to know whether it is still visible.

        Args:
            slug: Route slug; None or blank means the home slug.
            refresh: Re-fetch every level instead of reusing loaded slices.
        """
        target = normalize_slug(slug, self._resolver.home_slug)
        self._generation += 1
        generation = self._generation
        add_span_attributes(slug=target, generation=generation)
        self._publish(PageResolution(target, ResolutionStatus.RESOLVING, generation))

        try:
            apartados = await self._load_apartados(refresh)
        except SiteContentException as exc:
            logger.warning("Top-level fetch failed for slug %s: %s", target, exc.message)
            return self._publish(
                PageResolution(target, ResolutionStatus.ERROR, generation, error=exc)
            )

        apartado = self._resolver.resolve(target, apartados)
        if apartado is None:
            return self._publish(
                PageResolution(
                    target,
                    ResolutionStatus.NOT_FOUND,
                    generation,
                    error=SlugNotFoundException(target),
                )
            )

        self._publish(PageResolution(target, ResolutionStatus.LOADING_CHILDREN, generation))
        try:
            await self._caches[EntityKind.CATEGORIA].ensure_loaded(apartado.id, refresh=refresh)
        except SiteContentException as exc:
            logger.warning(
                "Categoria fetch failed for apartado %s (slug %s): %s",
                apartado.id,
                target,
                exc.message,
            )
            return self._publish(
                PageResolution(target, ResolutionStatus.ERROR, generation, error=exc)
            )

        self._publish(
            PageResolution(target, ResolutionStatus.LOADING_GRANDCHILDREN, generation)
        )
        categorias = self._owned(
            EntityKind.APARTADO,
            apartado.id,
            self._caches[EntityKind.CATEGORIA].children(apartado.id),
        )
        page, degraded = await self._load_subtree(apartado, categorias, refresh)
        return self._publish(
            PageResolution(
                target,
                ResolutionStatus.READY,
                generation,
                data=page,
                degraded=tuple(degraded),
            )
        )

    @traced("hierarchy_loader.resolve_categoria")
    async def resolve_categoria(
        self, categoria_id: str, refresh: bool = False
    ) -> PageResolution:
        """Run one navigation to a single categoria page (categoria -> secciones -> contenidos).

        Shares the generation counter with resolve(), so whichever navigation
        started last owns the visible state. A categoria already in the store
        is reused unless refresh is set; otherwise it is fetched by id and
        becomes the current categoria. A missing or inactive categoria, or one
        whose apartado is not publicly listed, ends in NOT_FOUND.
        """
        target = f"categoria/{categoria_id}"
        self._generation += 1
        generation = self._generation
        add_span_attributes(slug=target, generation=generation)
        self._publish(PageResolution(target, ResolutionStatus.RESOLVING, generation))

        def not_found() -> PageResolution:
            return self._publish(
                PageResolution(
                    target,
                    ResolutionStatus.NOT_FOUND,
                    generation,
                    error=ResourceNotFoundException(EntityKind.CATEGORIA.value, categoria_id),
                )
            )

        try:
            categoria = await self._load_categoria(categoria_id, refresh)
            apartados = await self._load_apartados(refresh)
        except SiteContentException as exc:
            logger.warning("Categoria %s could not be loaded: %s", categoria_id, exc.message)
            return self._publish(
                PageResolution(target, ResolutionStatus.ERROR, generation, error=exc)
            )
        if categoria is None or not categoria.active:
            return not_found()
        apartado = next(
            (a for a in apartados if a.id == categoria.apartado_id and a.active), None
        )
        if apartado is None:
            logger.info(
                "Categoria %s belongs to unlisted apartado %s", categoria_id, categoria.apartado_id
            )
            return not_found()

        self._publish(PageResolution(target, ResolutionStatus.LOADING_CHILDREN, generation))
        page, degraded = await self._load_subtree(
            apartado, self._owned(EntityKind.APARTADO, apartado.id, [categoria]), refresh
        )
        return self._publish(
            PageResolution(
                target,
                ResolutionStatus.READY,
                generation,
                data=page,
                degraded=tuple(degraded),
            )
        )

    async def _load_apartados(self, refresh: bool) -> list[Apartado]:
        """Top-level collection; an empty cached collection is requested again."""
        return await self._caches[EntityKind.APARTADO].ensure_loaded(
            ROOT_PARENT_ID, refresh=refresh, reload_empty=True
        )

    async def _load_categoria(self, categoria_id: str, refresh: bool) -> Categoria | None:
        if not refresh:
            cached = self._store.get(EntityKind.CATEGORIA, categoria_id)
            if cached is not None:
                return cached
        if self._api is None:
            return None
        categoria = await self._api.fetch_one(EntityKind.CATEGORIA, categoria_id)
        if categoria is not None:
            self._store.set_current(EntityKind.CATEGORIA, categoria)
        return categoria

    async def _load_subtree(
        self, apartado: Apartado, categorias: list[Categoria], refresh: bool
    ) -> tuple[ResolvedPage, list[PartialDegradation]]:
        """Fan out one seccion fetch per categoria, then one contenido fetch per seccion."""
        degraded: list[PartialDegradation] = []

        async def load_categoria(categoria: Categoria) -> tuple[str, list[Seccion]]:
            secciones = await self._load_degradable(
                EntityKind.SECCION, categoria.id, refresh, degraded
            )
            return categoria.id, self._owned(EntityKind.CATEGORIA, categoria.id, secciones)

        secciones_by_categoria = dict(
            await asyncio.gather(*(load_categoria(c) for c in categorias))
        )

        async def load_seccion(seccion: Seccion) -> tuple[str, list[Contenido]]:
            contenidos = await self._load_degradable(
                EntityKind.CONTENIDO, seccion.id, refresh, degraded
            )
            return seccion.id, self._owned(EntityKind.SECCION, seccion.id, contenidos)

        all_secciones = [s for group in secciones_by_categoria.values() for s in group]
        contenidos_by_seccion = dict(
            await asyncio.gather(*(load_seccion(s) for s in all_secciones))
        )

        page = ResolvedPage(
            apartado=apartado,
            categorias=tuple(categorias),
            secciones_by_categoria={
                key: tuple(value) for key, value in secciones_by_categoria.items()
            },
            contenidos_by_seccion={
                key: tuple(value) for key, value in contenidos_by_seccion.items()
            },
        )
        return page, degraded

    def _owned(self, parent_kind: EntityKind, parent_id: str, children: list) -> list:
        """Children whose FK is parent_id, provided the parent is merged in the store.

        Orphans (parent missing, e.g. removed by a concurrent refresh) are never exposed.
        """
        if not self._store.has(parent_kind, parent_id):
            return []
        return [child for child in children if child.parent_id == parent_id]

    async def _load_degradable(
        self,
        kind: EntityKind,
        parent_id: str,
        refresh: bool,
        degraded: list[PartialDegradation],
    ) -> list:
        """Load children of parent_id; a failure yields [] and a degradation record."""
        try:
            return await self._caches[kind].ensure_loaded(parent_id, refresh=refresh)
        except SiteContentException as exc:
            logger.warning(
                "Partial degradation: %s for parent %s rendered empty (%s)",
                kind.value,
                parent_id,
                exc.message,
            )
            add_span_event(
                "partial_degradation", {"kind": kind.value, "parent_id": parent_id}
            )
            degraded.append(PartialDegradation(kind, parent_id, exc.message))
            return []

    def _publish(self, resolution: PageResolution) -> PageResolution:
        """Make resolution visible if its navigation is still the latest."""
        if resolution.generation != self._generation:
            logger.debug(
                "Ignoring stale %s for slug %s (generation %d, latest %d)",
                resolution.status.value,
                resolution.slug,
                resolution.generation,
                self._generation,
            )
            return resolution
        self._visible = resolution
        if resolution.status.is_terminal:
            logger.info("Page %s -> %s", resolution.slug, resolution.status.value)
        else:
            logger.debug("Page %s -> %s", resolution.slug, resolution.status.value)
        for listener in list(self._listeners):
            listener(resolution)
        return resolution
