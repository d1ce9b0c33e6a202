# Middleware package init
"""
Blog API — Middleware Package
===============================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log line carries the id; the id is
    also echoed back in the `X-Request-ID` response header.
"""
