# Clients package init
"""
Service API — Downstream Clients
=================================

What:  HTTP clients for the services this API calls.

Client Inventory:
    - CrudClient: httpx-based client of the platform CRUD service (books)
"""
