"""Request dependencies: the application-owned store and services."""

from fastapi import Request

from gym_assistant.services.domain_store import DomainStore
from gym_assistant.services.library import ExerciseLibrary
from gym_assistant.services.session_engine import SessionEngine
from gym_assistant.services.templates import TemplateManager


def get_store(request: Request) -> DomainStore:
    return request.app.state.store


def get_library(request: Request) -> ExerciseLibrary:
    return request.app.state.library


def get_templates(request: Request) -> TemplateManager:
    return request.app.state.templates


def get_session_engine(request: Request) -> SessionEngine:
    return request.app.state.session_engine
