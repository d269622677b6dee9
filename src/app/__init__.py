"""User directory service.

A FastAPI application exposing CRUD and search endpoints for user records
persisted with SQLModel.
"""

__version__ = "0.1.0"
