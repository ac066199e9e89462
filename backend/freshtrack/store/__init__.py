from freshtrack.store.base import InventoryStore, validate_payload
from freshtrack.store.sql import SqlInventoryStore

__all__ = ["InventoryStore", "SqlInventoryStore", "validate_payload"]
