"""
Service API — Application Package Initializer
==============================================

What: Marks the `service_api` directory as a Python package.
Who:  Used by uvicorn (`uvicorn service_api.main:app`), pytest, and the
      health endpoints (fallback version string).

Architecture Note:
    The service follows the same thin layering on every endpoint:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Business Logic)       │  ← Greeting assembly, error translation
    ├─────────────────────────────────────┤
    │   Clients (Downstream HTTP calls)   │  ← httpx calls to the CRUD service
    └─────────────────────────────────────┘

    Cross-cutting pieces live beside the layers:
    - headers.py:      which inbound headers get forwarded downstream
    - error_mapper.py: exception → (status, {code, message})
    - middleware/:     request context and access logging
"""

__version__ = "1.0.0"
