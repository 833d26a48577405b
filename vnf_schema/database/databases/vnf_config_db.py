"""
VNF config database layout.
Stores YAML configuration files managed by the VNF configuration service.

Structure:
- yaml_latest: Current state of each configuration file (one per filename)
- yaml_history: Append-only snapshots of every change, newest first per file

Both collections are written by the configuration service only. This module
just declares what must exist before the service's first write.
"""
from pymongo import ASCENDING, DESCENDING

DB_NAME = "vnf_config"


class Collections:
    """Collection names in vnf_config."""
    YAML_LATEST = "yaml_latest"    # Latest version per filename
    YAML_HISTORY = "yaml_history"  # Change history, many per filename

    ALL = [YAML_LATEST, YAML_HISTORY]

    # Index definitions for each collection
    INDEXES = {
        "yaml_latest": [
            {"keys": [("filename", ASCENDING)], "name": "filename_1", "unique": True},
            {"keys": [("updated_at", DESCENDING)], "name": "updated_at_-1"},
        ],
        "yaml_history": [
            {"keys": [("filename", ASCENDING)], "name": "filename_1"},  # Non-unique
            {"keys": [("timestamp", DESCENDING)], "name": "timestamp_-1"},
            # History for one file, newest first
            {
                "keys": [("filename", ASCENDING), ("timestamp", DESCENDING)],
                "name": "filename_1_timestamp_-1",
            },
        ],
    }


HISTORY_BY_FILE_INDEX = "filename_1_timestamp_-1"


def app_user_roles(db_name: str, role: str = "readWrite") -> list[dict]:
    """Role list granting `role` on `db_name` only."""
    return [{"role": role, "db": db_name}]


# Manifest read by the initializer
DB_MANIFEST = {
    "db_name": DB_NAME,
    "purpose": "YAML configuration files, latest version and change history",
    "collections": Collections.ALL,
}
