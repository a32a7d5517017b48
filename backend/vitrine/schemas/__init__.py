"""
Vitrine Backend: Pydantic Request/Response Schemas
====================================================

API contracts, kept separate from the SQLAlchemy models so the exposed
fields are chosen explicitly (a User never serializes its password hash).
Request bodies are validated at the boundary, before any handler runs.
"""
