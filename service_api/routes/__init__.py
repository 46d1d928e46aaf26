# Routes package init
"""
Service API — API Routes Package
=================================

What:  HTTP route handlers, registered explicitly by create_app().

Route Inventory:
    - hello_world.py:    GET  /hello
                         GET  /hello/with-call
                         POST /hello/{pathParam}
    - health.py:         GET  /-/healthz, /-/ready, /-/check-up
    - documentation.py:  GET  /documentation (→ Swagger UI)
                         GET  /documentation/openapi.json (served by FastAPI)

Routes stay thin: read the request, call a service, return a schema.
"""
