"""
Application layer package.

Use cases coordinate domain rules and ports to fulfill
business operations. No framework or infrastructure imports allowed.
"""
