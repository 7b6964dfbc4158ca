"""
Access bounded context — domain layer.

API key records, permission tiers and the key registry port.
"""
