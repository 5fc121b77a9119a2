"""
Project Tracker API

A small REST backend over in-memory project and user collections,
documented with a generated OpenAPI schema.
"""

__version__ = "1.0.0"
