# Routes package init
"""
Bookmarks API — API Routes Package
===================================

Route Inventory:
    - bookmarks.py:  GET/POST        /api/bookmarks
                     GET/PATCH/DELETE /api/bookmarks/{id}
    - health.py:     GET             /health

Routes are THIN: they read the request, call validation and the access
layer, and pick status codes and headers. Business rules live in services.
"""
