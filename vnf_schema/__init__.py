"""
vnf-schema - MongoDB bootstrap for the VNF configuration service.
"""
__version__ = "0.1.0"
