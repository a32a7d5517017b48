"""
Vitrine Backend: Application Package
======================================

Layers:
    ┌─────────────────────────────────────┐
    │   Routes + auth gate (HTTP layer)   │  status codes, request parsing
    ├─────────────────────────────────────┤
    │         Services                    │  rules, validation, file intake
    ├─────────────────────────────────────┤
    │   Repository, Models & Schemas      │  SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │         Database                    │  async engine and sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
