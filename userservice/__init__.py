"""
User Records Service — Application Package Initializer
=======================================================

What: Marks the `userservice` directory as a Python package.
Who:  Used by uvicorn (`userservice.main:app`), pytest, and the console script.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Store calls, merge, outcomes
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Stored document + API contract
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Shared MongoDB client handle
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
