"""
Application layer for the catalog bounded context.

Use cases coordinate validation rules, the query engine and the
product repository. No framework or infrastructure imports allowed.
"""
