"""
Products API — product catalog HTTP service.

Application package root. A modular monolith using hexagonal
architecture (ports & adapters).

Bounded contexts:
    - catalog: Product CRUD, search, filtering, pagination, stats.
    - access: API key registry and authentication.

Layers:
    - domain: Entities, validation rules, query engine, ports (ABCs), errors.
    - application: Use cases, DTOs, orchestration.
    - infrastructure: Adapters (in-memory store, SQL mirror, key registry).
    - interfaces: FastAPI routers, pipeline stages, Pydantic schemas.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
