"""
Catalog bounded context — domain layer.

Product entity, field validation rules, the filter/search/paginate/
aggregate query engine, and the persistence ports.
"""
