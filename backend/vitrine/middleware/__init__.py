"""
Vitrine Backend: Middleware Package
=====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Access Log] → [Rate Limit] → [GZip] → [CORS] → Router

    - Request ID wraps everything, so even a 429 carries X-Request-ID.
    - The access log sees the final status, including rate-limited requests.
    - Rate limiting only counts /api/ paths; pages and assets are free.

Authorization is not a middleware: it is the `require_admin` dependency,
attached per route (see vitrine.auth).
"""
