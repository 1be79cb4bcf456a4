"""
Core application utilities for settings, logging, security and FastAPI dependencies.

This package provides:
- Application-level settings (separate from DB settings)
- Structured logging with request context
- Session token and password helpers
- Dependency helpers (DB session, current user, role checks)
"""
