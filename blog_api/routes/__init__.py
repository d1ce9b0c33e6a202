# Routes package init
"""
Blog API — API Routes Package
===============================

Route Inventory:
    - posts.py:   GET/POST /posts, GET/PUT/DELETE /posts/{id}
    - health.py:  GET /health

Routes are THIN: extract the request data, make one service call, pick the
status code. Store access lives in services/post_service.py.
"""
