"""ORM models - import all so Base.metadata is complete for table creation."""

from gym_assistant.models.store_entry import StoreEntry

__all__ = ["StoreEntry"]
