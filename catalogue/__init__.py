"""Aluminium product catalogue.

Browse, search and administer a product catalogue backed by a hosted
document store and blob storage service.
"""

__version__ = "0.1.0"
