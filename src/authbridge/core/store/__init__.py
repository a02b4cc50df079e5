from .entity_store import EntityStore, Record, SqlEntityStore

__all__ = ["EntityStore", "Record", "SqlEntityStore"]
