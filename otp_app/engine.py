"""
Plan loading entry points.

Coordinates one load end to end:
Document → Decode (sync) → Resolve references (async) → Resolved plan

Every top-level call opens a fresh session with its own decode context and
locator cache, so nothing leaks between loads.
"""

from pathlib import Path
from typing import Any, Optional, Union

import structlog

from .config.defaults import DefaultConfig, get_default_config
from .config.loader import ConfigLoader
from .errors import DecodeError, ResolutionError
from .logging.config import configure_logging
from .models.plan import TrainingPlan, WorkoutTemplate
from .models.zones import ZoneSystem
from .remote.decoder import RemoteDecoder
from .remote.documents import DocumentDecoder, get_document_decoder
from .remote.resolvable import Resolvable
from .remote.transport import DefaultRemoteResolver, RemoteResolver
from .schema.context import TrainingContext
from .schema.plan import TrainingPlanDocument
from .schema.workout import WorkoutTemplateDocument

logger = structlog.get_logger(__name__)


class PlanLoader:
    """
    Loads training plans whose nested parts may live in other documents.

    The loader owns the long-lived pieces (configuration, document format
    and fetch transport); each load gets its own ``RemoteDecoder`` session.
    """

    def __init__(
        self,
        config: Optional[DefaultConfig] = None,
        document_decoder: Optional[DocumentDecoder] = None,
        resolver: Optional[RemoteResolver] = None,
    ) -> None:
        self.logger = logger
        self.config = config or get_default_config()
        self.document_decoder = document_decoder or get_document_decoder(self.config.document.format)

        self._owns_resolver = resolver is None
        self.resolver = resolver or DefaultRemoteResolver(self.config.fetch)

        self.logger.info(
            "Plan loader initialized",
            document_format=self.document_decoder.format_name,
            concurrent=self.config.resolver.concurrent,
            resolver=type(self.resolver).__name__
        )

    @classmethod
    def from_config_dir(
        cls,
        config_dir: Optional[Union[str, Path]] = None,
        overrides: Optional[dict[str, Any]] = None,
        setup_logging: bool = False,
        **kwargs: Any,
    ) -> "PlanLoader":
        """
        Create a loader from ``otp.yaml`` in ``config_dir`` plus overrides.

        With ``setup_logging``, structlog is configured from the ``logging``
        section before the loader is built.
        """
        loader = ConfigLoader.create(Path(config_dir) if config_dir is not None else None)
        config = loader.load(overrides)
        if setup_logging:
            configure_logging(level=config.logging.level, format_json=config.logging.format_json)
        return cls(config=config, **kwargs)

    def open_session(self, context: Optional[TrainingContext] = None) -> RemoteDecoder:
        """Start a resolution session with an empty cache."""
        return RemoteDecoder(
            self.document_decoder,
            self.resolver,
            context=context if context is not None else TrainingContext(),
            params=self.config.resolver,
        )

    def decode_plan(self, data: Union[bytes, str],
                    session: Optional[RemoteDecoder] = None) -> TrainingPlanDocument:
        """
        Decode a plan document without resolving its references.

        Raises:
            DecodeError: If the document is malformed
        """
        session = session or self.open_session()
        try:
            return session.decode_data(TrainingPlanDocument, data)
        finally:
            session.context.freeze()

    async def resolve(self, node: Resolvable, session: RemoteDecoder) -> None:
        """
        Resolve every reference reachable from ``node``.

        Resolution is idempotent: resolving a resolved graph again with the
        same session performs no fetch.

        Raises:
            ResolutionError: If any referenced document fails to load
        """
        await node.resolve(session)
        self.logger.debug("References resolved", **session.get_stats())

    async def load_plan(self, data: Union[bytes, str]) -> TrainingPlan:
        """
        Decode a plan document, resolve it and return the resolved plan.

        Raises:
            DecodeError: If the top-level document is malformed
            ResolutionError: If a referenced document fails to load
        """
        session = self.open_session()
        node = self.decode_plan(data, session)
        return await self._finish(node, session)

    async def load_template(self, data: Union[bytes, str],
                            zone_system: Optional[ZoneSystem] = None) -> WorkoutTemplate:
        """
        Load a standalone workout template.

        Direct intensities are classified against ``zone_system`` if given.
        """
        session = self.open_session(TrainingContext(zone_system))
        try:
            node = session.decode_data(WorkoutTemplateDocument, data)
        finally:
            session.context.freeze()

        await self.resolve(node, session)
        return node.to_model()

    async def fetch_plan(self, locator: str) -> TrainingPlan:
        """
        Fetch a plan document through the transport, then load it.

        Raises:
            ResolutionError: If the plan or anything it references fails to load
        """
        session = self.open_session()
        try:
            node = await session.decode(locator, TrainingPlanDocument)
        finally:
            session.context.freeze()
        return await self._finish(node, session)

    async def _finish(self, node: TrainingPlanDocument, session: RemoteDecoder) -> TrainingPlan:
        try:
            await self.resolve(node, session)
            plan = node.to_model()
        except (DecodeError, ResolutionError) as e:
            self.logger.error(
                "Plan load failed",
                plan_name=node.name,
                error_type=type(e).__name__,
                error=str(e)
            )
            raise

        self.logger.info(
            "Plan loaded",
            plan_name=plan.name,
            weeks=len(plan.weeks),
            fetch_count=session.fetch_count,
            cache_hits=session.cache_hits
        )
        return plan

    async def aclose(self) -> None:
        """Close the transport if this loader created it."""
        if self._owns_resolver:
            await self.resolver.aclose()

    async def __aenter__(self) -> "PlanLoader":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


async def load_training_plan(data: Union[bytes, str], **kwargs: Any) -> TrainingPlan:
    """Load one plan with a throwaway ``PlanLoader`` built from ``kwargs``."""
    async with PlanLoader(**kwargs) as loader:
        return await loader.load_plan(data)
