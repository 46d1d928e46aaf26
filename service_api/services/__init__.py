# Services package init
"""
Service API — Services Layer
=============================

What:  Business logic layer sitting between routes (HTTP) and downstream clients.
How:   Services accept plain values and schemas, call clients, and return
       response schemas. They are created in create_app() and injected into
       routes through FastAPI dependencies.

Service Inventory:
    - HelloWorldService: greetings and the downstream books lookup
"""
