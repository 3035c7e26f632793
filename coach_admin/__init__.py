"""
Coach Admin - record management for coaches.

This package contains the complete application:
- core: Framework-agnostic models, validation and filters
- infrastructure: Flat-file storage and the coach repository
- api: FastAPI routes and dependencies
- client: HTTP client and client-side cache
- config: Application configuration
"""

__version__ = "0.1.0"
