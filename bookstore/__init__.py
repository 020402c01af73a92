"""
Bookstore API Application Package

A small CRUD service over a single ``books`` table.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine, session factory and migration helpers
- exceptions.py: Application error type and exception handlers
- main.py: FastAPI application factory and lifespan
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
"""

__version__ = "0.1.0"
