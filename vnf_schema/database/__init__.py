"""
Database module - MongoDB connection, layout definition, initializer and verifier.

Import connections from vnf_schema.database.connections; the settings module
reads the layout from here, so this package must not import it eagerly.
"""
from vnf_schema.database.databases import vnf_config_db

__all__ = ["vnf_config_db"]
