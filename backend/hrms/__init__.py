"""
HRMS Employee Service — Application Package Initializer
========================================================

What: Marks the `hrms` directory as a Python package.
Who:  Imported by uvicorn (`hrms.main:app`), the `hrms` console script and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← status codes, path/body parsing
    ├─────────────────────────────────────┤
    │         Services (Operations)       │  ← one database call per operation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Mongo documents + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← shared async Mongo handle
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
