# Middleware package init
"""
User Records Service — Middleware Package
==========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → Route Handler

    Responses travel back through the same chain in reverse, picking up the
    X-Request-ID header and producing the access log line.
"""
