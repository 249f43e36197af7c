"""
Dealerships API — Application Package
=======================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Repositories (one collection)   │  ← queries, id assignment
    ├─────────────────────────────────────┤
    │        Schemas (API contracts)      │  ← Pydantic DTOs
    ├─────────────────────────────────────┤
    │     Database (MongoDB lifecycle)    │  ← AsyncMongoClient
    └─────────────────────────────────────┘

    Startup seeding lives in services/seed_service.py.
"""

__version__ = "1.0.0"
