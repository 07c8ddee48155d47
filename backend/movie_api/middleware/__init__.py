# Middleware package init
"""
Movie API Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Rate Limit first: abusive clients are rejected before any work is done
    2. Request ID: correlation id for every log line of the request
    3. Logging: one access line per request, carrying the request id

    Responses travel the chain in reverse, so the request id header and the
    access log see the final status code.
"""
