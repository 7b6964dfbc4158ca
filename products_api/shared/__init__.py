"""
Shared module package.

Contains cross-cutting concerns used across bounded contexts:
- Error translation
- Request logging
- Security middleware
- Rate limiting
- Logging configuration
"""
