"""Identifier generation for catalog, planner and archive records."""

from uuid import uuid4


def new_id(prefix: str) -> str:
    """Collision-resistant id, e.g. ``template_3f2b...``."""
    return f"{prefix}_{uuid4().hex}"
