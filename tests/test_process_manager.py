"""Tests for the ProcessManager saga."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from message_assembly.application.process_manager import (
    DEFAULT_PARTS,
    ProcessManager,
)
from message_assembly.correlation import CorrelationContext
from message_assembly.cqrs.command import AcquirePart
from message_assembly.cqrs.message_bus import MessageBus
from message_assembly.domain.events import ConstructionStarted, PartAcquired
from message_assembly.primitives.exceptions import ConfigurationError


@pytest.fixture
def command_bus() -> AsyncMock:
    return AsyncMock()


def _dispatched_parts(command_bus: AsyncMock) -> list[str]:
    commands = [call.args[0] for call in command_bus.dispatch.await_args_list]
    assert all(isinstance(c, AcquirePart) for c in commands)
    return [c.part_to_acquire for c in commands]


class TestRouting:
    @pytest.mark.asyncio
    async def test_start_requests_first_part(
        self, command_bus: AsyncMock, context: CorrelationContext
    ) -> None:
        saga = ProcessManager(command_bus)

        await saga.on_construction_started(ConstructionStarted(context=context))

        assert _dispatched_parts(command_bus) == ["Hello"]
        command = command_bus.dispatch.await_args.args[0]
        assert command.context == context

    @pytest.mark.asyncio
    async def test_first_part_requests_second(
        self, command_bus: AsyncMock, context: CorrelationContext
    ) -> None:
        saga = ProcessManager(command_bus)

        await saga.on_part_acquired(
            PartAcquired(context=context, part="Hello", position=0)
        )

        assert _dispatched_parts(command_bus) == ["World"]

    @pytest.mark.asyncio
    async def test_last_part_dispatches_nothing(
        self, command_bus: AsyncMock, context: CorrelationContext
    ) -> None:
        saga = ProcessManager(command_bus)

        await saga.on_part_acquired(
            PartAcquired(context=context, part="World", position=1)
        )

        command_bus.dispatch.assert_not_awaited()

    @pytest.mark.parametrize(
        ("part", "position"),
        [("Goodbye", 0), ("Hello", 1), ("World", 0), ("Hello", 7)],
    )
    @pytest.mark.asyncio
    async def test_unexpected_part_dispatches_nothing(
        self,
        command_bus: AsyncMock,
        context: CorrelationContext,
        part: str,
        position: int,
    ) -> None:
        saga = ProcessManager(command_bus)

        await saga.on_part_acquired(
            PartAcquired(context=context, part=part, position=position)
        )

        command_bus.dispatch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_repeated_part_values_route_by_position(
        self, command_bus: AsyncMock, context: CorrelationContext
    ) -> None:
        saga = ProcessManager(command_bus, parts=("ha", "ha"))

        for position in (0, 1):
            await saga.on_part_acquired(
                PartAcquired(context=context, part="ha", position=position)
            )

        assert _dispatched_parts(command_bus) == ["ha"]


class TestConfiguration:
    def test_defaults(self, command_bus: AsyncMock) -> None:
        assert ProcessManager(command_bus).parts == DEFAULT_PARTS == ("Hello", "World")

    @pytest.mark.parametrize("parts", [(), ("Hello", "")])
    def test_rejects_bad_parts(self, command_bus: AsyncMock, parts: tuple) -> None:
        with pytest.raises(ConfigurationError):
            ProcessManager(command_bus, parts=parts)

    @pytest.mark.parametrize("parts", [("Hello",), ("Hello", "big", "World")])
    def test_parts_must_match_acquire_steps(
        self, command_bus: AsyncMock, parts: tuple[str, ...]
    ) -> None:
        with pytest.raises(ConfigurationError, match="expected 2"):
            ProcessManager(command_bus, parts=parts)

    def test_subscribe_registers_both_listeners(self, command_bus: AsyncMock) -> None:
        bus = MessageBus()

        ProcessManager(command_bus).subscribe(bus)

        assert bus.get_registered_handlers()["events"] == {
            "ConstructionStarted": 1,
            "PartAcquired": 1,
        }
