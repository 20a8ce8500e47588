"""
Datacenter Registry - CRUD registry for datacenter metadata records.
"""
__version__ = "0.1.0"
