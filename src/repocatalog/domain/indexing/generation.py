"""Lifecycle values for index generations and the publish state machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from datetime import datetime


class GenerationState(StrEnum):
    BUILDING = "building"
    PUBLISHED = "published"
    RETIRED = "retired"
    PRUNED = "pruned"


class PublishPhase(StrEnum):
    IDLE = "idle"
    BUILDING = "building"
    VERIFYING = "verifying"
    PUBLISHED = "published"
    PRUNING = "pruning"


_TRANSITIONS: Final[dict[GenerationState, frozenset[GenerationState]]] = {
    GenerationState.BUILDING: frozenset({GenerationState.PUBLISHED, GenerationState.PRUNED}),
    GenerationState.PUBLISHED: frozenset({GenerationState.RETIRED}),
    GenerationState.RETIRED: frozenset({GenerationState.PUBLISHED, GenerationState.PRUNED}),
    GenerationState.PRUNED: frozenset(),
}

_PHASES: Final[dict[PublishPhase, PublishPhase]] = {
    PublishPhase.IDLE: PublishPhase.BUILDING,
    PublishPhase.BUILDING: PublishPhase.VERIFYING,
    PublishPhase.VERIFYING: PublishPhase.PUBLISHED,
    PublishPhase.PUBLISHED: PublishPhase.PRUNING,
    PublishPhase.PRUNING: PublishPhase.IDLE,
}


def next_phase(phase: PublishPhase) -> PublishPhase:
    return _PHASES[phase]


@dataclass(slots=True, kw_only=True)
class IndexGeneration:
    """One immutable, fully or partially built index instance of an alias.

    A generation never holds the alias before it is ``PUBLISHED``; a
    generation that never got published stays ``BUILDING`` until pruned.
    """

    name: str
    alias: str
    created_at: datetime
    state: GenerationState = GenerationState.BUILDING

    def transition(self, state: GenerationState) -> None:
        if state not in _TRANSITIONS[self.state]:
            raise ValueError(f"Generation '{self.name}' cannot move from {self.state} to {state}")
        self.state = state

    @property
    def is_published(self) -> bool:
        return self.state is GenerationState.PUBLISHED
