# Middleware package init
"""
Dealerships API — Middleware Package

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log line carries the id.
"""
