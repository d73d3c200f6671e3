# Services package init
"""
Bookmarks API — Services Layer
===============================

What:  Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - bookmark_service.py: Access layer, one SQL statement per CRUD intent
    - validation.py:       Create / partial-update payload rules (→ 400)
    - sanitize.py:         XSS-safe serialization of outbound records

Routes stay thin: they read the request, call validation, call the access
layer, and serialize through the sanitizer.
"""
