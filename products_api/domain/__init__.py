"""
Domain layer package.

Contains pure business logic: entities, validation rules, the query
engine, error kinds and port interfaces. No framework imports, no IO.
"""
