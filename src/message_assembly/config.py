"""AssemblySettings — explicit configuration for the composition root."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .application.process_manager import DEFAULT_PARTS
from .application.retry import ExponentialBackoffPolicy
from .domain.fsm import ASSEMBLY_FSM, AssemblyAction


class AssemblySettings(BaseModel):
    """Tunable settings. Defaults reproduce the classic "Hello World" run."""

    model_config = ConfigDict(frozen=True)

    parts: tuple[str, ...] = DEFAULT_PARTS
    retry: ExponentialBackoffPolicy = Field(default_factory=ExponentialBackoffPolicy)
    offload_timeout: float | None = Field(default=5.0, gt=0)
    use_worker: bool = True

    @field_validator("parts")
    @classmethod
    def _one_part_per_step(cls, parts: tuple[str, ...]) -> tuple[str, ...]:
        expected = ASSEMBLY_FSM.action_count(AssemblyAction.ACQUIRE)
        if len(parts) != expected:
            raise ValueError(f"expected {expected} parts, got {len(parts)}")
        if any(not part for part in parts):
            raise ValueError("parts must be non-empty strings")
        return parts
