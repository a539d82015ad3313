"""
Book Review API Application Package

A small REST API for a book-review catalog: books can be created, listed,
searched and read with their reviews, and authenticated users can post one
review per book.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine, session factory and declarative base
- exceptions.py: API error hierarchy mapped to HTTP responses
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection (db session, pagination, auth guard)
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Business logic (books, reviews, security, rate limiting)
"""

__version__ = "1.0.0"
