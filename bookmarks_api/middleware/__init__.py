# Middleware package init
"""
Bookmarks API — Middleware Package
===================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [Security Headers] → [CORS] → [Bearer Token] → Route

    Why this order:
    1. Request ID first: every later log line, including 401s, carries the id
    2. Logging: one access line per request with final status and duration
    3. Security headers: added to every response, rejections included
    4. CORS: answers browser preflights (which never carry credentials) and
       decorates 401 responses so browsers can read them
    5. Bearer token: rejects unauthorized requests before routing or body parsing
"""
