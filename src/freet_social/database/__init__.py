"""
# Database Package

Persistence layer for the Freet Social service, built on **Motor** (async MongoDB driver).

- **`manager`**: `DatabaseManager` and the module-level `db_manager` singleton.
- **`relationship_store`**: `RelationshipStore`, the generic keyed store behind
  follower views, groups and contact information displays.

The connection is established lazily during application startup via
`db_manager.connect()` and closed with `db_manager.disconnect()`.
"""

from freet_social.database.manager import DatabaseManager, db_manager

__all__ = ["DatabaseManager", "db_manager"]
