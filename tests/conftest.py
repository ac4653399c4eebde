from __future__ import annotations

from pathlib import Path

import pytest

from gym_assistant.core.config import Settings
from gym_assistant.services.domain_store import DomainStore
from gym_assistant.services.library import ExerciseLibrary
from gym_assistant.services.persistence import MemoryKeyValueStore
from gym_assistant.services.session_engine import SessionEngine
from gym_assistant.services.templates import TemplateManager

from helpers import StepClock


@pytest.fixture
def backend() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def store(backend: MemoryKeyValueStore) -> DomainStore:
    return DomainStore.load(backend)


@pytest.fixture
def library(store: DomainStore) -> ExerciseLibrary:
    return ExerciseLibrary(store)


@pytest.fixture
def templates(store: DomainStore, library: ExerciseLibrary) -> TemplateManager:
    return TemplateManager(store, library)


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def engine(
    store: DomainStore,
    library: ExerciseLibrary,
    templates: TemplateManager,
    clock: StepClock,
) -> SessionEngine:
    return SessionEngine(store, library, templates, clock=clock)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(data_dir=tmp_path / "data", environment="test")
