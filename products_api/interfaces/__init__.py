"""
Interfaces layer package.

Contains FastAPI routers, the pipeline stages every product request
passes through, and Pydantic response schemas.
No business logic belongs here. Routes call use cases and return responses.
"""
