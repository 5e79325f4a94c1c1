"""gRPC transport layer for the application.

This package hosts:
- Server bootstrap and interceptors.
- Thin service adapters that map Struct requests to application services
  (no generated stubs; see `services/report_service.py`).
"""
