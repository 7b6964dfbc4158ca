"""
Infrastructure layer package.

Contains concrete implementations (adapters) of the ports
defined in the domain layer: the in-memory product store, the
optional SQL mirror, and the API key registry.
"""
