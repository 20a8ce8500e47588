"""
API Routers module.
"""
from dcregistry.routers import datacenters, health

__all__ = ["datacenters", "health"]
