"""
Database definitions and collection constants.
"""
from vnf_schema.database.databases import vnf_config_db

__all__ = ["vnf_config_db"]
