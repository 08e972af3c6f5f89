from __future__ import annotations

from datetime import UTC, datetime

import pytest

from repocatalog.domain.indexing import GenerationState, IndexGeneration, PublishPhase
from repocatalog.domain.indexing.generation import next_phase


def _generation() -> IndexGeneration:
    return IndexGeneration(
        name="repo-20240101000000000000",
        alias="repo",
        created_at=datetime(2024, 1, 1, tzinfo=UTC),
    )


def test_generation_lifecycle() -> None:
    generation = _generation()
    assert generation.state is GenerationState.BUILDING

    generation.transition(GenerationState.PUBLISHED)
    assert generation.is_published
    generation.transition(GenerationState.RETIRED)
    generation.transition(GenerationState.PRUNED)

    assert generation.state is GenerationState.PRUNED


def test_published_generation_cannot_be_pruned_directly() -> None:
    generation = _generation()
    generation.transition(GenerationState.PUBLISHED)

    with pytest.raises(ValueError, match="cannot move"):
        generation.transition(GenerationState.PRUNED)


def test_publish_phases_cycle_back_to_idle() -> None:
    phase = PublishPhase.IDLE
    visited = [phase]
    for _ in range(5):
        phase = next_phase(phase)
        visited.append(phase)

    assert visited == [
        PublishPhase.IDLE,
        PublishPhase.BUILDING,
        PublishPhase.VERIFYING,
        PublishPhase.PUBLISHED,
        PublishPhase.PRUNING,
        PublishPhase.IDLE,
    ]
