# Routes package init
"""
WordTally Backend — API Routes Package
=======================================

Route Inventory:
    - auth.py:    POST   /auth/signup, /auth/login, /auth/verify
    - urls.py:    POST   /url/add
                  GET    /url/list, /url/list/domains, /url/count
                  PUT    /url/favorite/change
                  DELETE /url/delete
    - health.py:  GET    /health

Routes stay thin: read the request, call a service, wrap the result.
"""
