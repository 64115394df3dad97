# Routes package init
"""
DocRelay Backend — API Routes Package
======================================

Route Inventory:
    - records.py: GET /, GET /test, GET /create, POST /create, GET /read
    - health.py:  GET /health (MongoDB ping)

Routes stay thin: read the request, call record_service, return the result.
"""
