# Middleware package init
"""
Service API — Middleware Package
=================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request Context] → [Logging] → Route Handler

    1. Request Context: request id + platform identity into ContextVars
    2. Logging: start/end access lines using that context

Error responses are not produced here: the exception handlers registered
in main.py turn every error into `{code, message}` before the response
reaches the logging middleware, except for uncaught faults, which Starlette's
outermost error middleware renders through the same mapper.
"""
