"""Composition root — builds and wires every component explicitly."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .adapters.memory.aggregate_store import InMemoryAggregateStore
from .application.part_acquisition import PartAcquisitionHandler
from .application.process_manager import ProcessManager
from .application.projection import InMemoryRenderSink, RenderProjection
from .application.start_construction import StartConstructionHandler
from .config import AssemblySettings
from .correlation import CorrelationContext
from .cqrs.command import AcquirePart, StartConstruction
from .cqrs.message_bus import MessageBus
from .offload.gateway import OffloadGateway
from .primitives.id_generator import IIDGenerator, UUID4Generator

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from .domain.aggregate import MessageAggregate
    from .offload.gateway import WorkerFactory

logger = logging.getLogger("message_assembly.bootstrap")


@dataclass
class AssemblyApplication:
    """Every wired component plus lifecycle helpers.

    Usage::

        async with build_application() as app:
            aggregate = await app.run_to_completion("c1")
            assert aggregate.final_message == "Hello World"
    """

    settings: AssemblySettings
    id_generator: IIDGenerator
    bus: MessageBus
    store: InMemoryAggregateStore
    gateway: OffloadGateway
    part_handler: PartAcquisitionHandler
    start_handler: StartConstructionHandler
    process_manager: ProcessManager
    projection: RenderProjection
    render_sink: InMemoryRenderSink

    async def start(self) -> None:
        await self.bus.start()
        if self.settings.use_worker:
            self.gateway.initialize()
        logger.info("Message assembly started (parts=%s)", self.settings.parts)

    async def stop(self) -> None:
        self.gateway.terminate()
        await self.bus.stop()
        logger.info("Message assembly stopped")

    async def __aenter__(self) -> AssemblyApplication:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    async def begin(self, correlation_id: str | None = None) -> CorrelationContext:
        """Start a new construction process and return its context."""
        context = (
            CorrelationContext(correlation_id=correlation_id)
            if correlation_id is not None
            else CorrelationContext.new(self.id_generator)
        )
        await self.bus.dispatch(StartConstruction(context=context))
        return context

    async def run_to_completion(
        self, correlation_id: str | None = None
    ) -> MessageAggregate | None:
        """Begin a process, wait for the bus to go idle, return the aggregate."""
        context = await self.begin(correlation_id)
        await self.bus.join()
        return await self.store.find_by_id(context)


def build_application(
    settings: AssemblySettings | None = None,
    *,
    id_generator: IIDGenerator | None = None,
    worker_factory: WorkerFactory | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> AssemblyApplication:
    """Construct components in dependency order and register them on the bus."""
    settings = settings or AssemblySettings()
    id_generator = id_generator or UUID4Generator()

    bus = MessageBus()
    store = InMemoryAggregateStore(bus)
    gateway = OffloadGateway(
        id_generator,
        worker_factory,
        request_timeout=settings.offload_timeout,
    )

    part_handler = PartAcquisitionHandler(store, gateway, settings.retry, sleep=sleep)
    start_handler = StartConstructionHandler(store)
    bus.register_command_handler(StartConstruction, start_handler.handle)
    bus.register_command_handler(AcquirePart, part_handler.handle)

    process_manager = ProcessManager(bus, settings.parts)
    process_manager.subscribe(bus)
    projection = RenderProjection(bus)
    projection.subscribe(bus)
    render_sink = InMemoryRenderSink()
    render_sink.subscribe(bus)

    return AssemblyApplication(
        settings=settings,
        id_generator=id_generator,
        bus=bus,
        store=store,
        gateway=gateway,
        part_handler=part_handler,
        start_handler=start_handler,
        process_manager=process_manager,
        projection=projection,
        render_sink=render_sink,
    )
