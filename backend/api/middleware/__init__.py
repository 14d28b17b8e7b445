"""
Graph API Backend — Middleware Package
=======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (request direction):
    Request → [Request ID] → [Logging] → [Security Headers] → [CORS] → [Errors] → Route Handler

    Responses travel back through the same chain in reverse, so the access
    log sees the final status code and the request ID header is added last.
    [Errors] turns unhandled exceptions into a 500 before they leave the
    chain, so error responses get the same headers and access line.
"""
