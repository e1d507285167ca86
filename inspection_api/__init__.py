"""
Inspection Data API — Package Initializer
==========================================

Read-only HTTP API over inspection data records and the links to their
anonymized images.

Layers:

    ┌─────────────────────────────────────┐
    │     Routes + Security (API Layer)   │  ← HTTP concerns, role checks
    ├─────────────────────────────────────┤
    │   Services (InspectionDataService)  │  ← Queries and lookups
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
