"""
Graph API Backend — API Routes Package
=======================================

Route Inventory:
    - root.py:    GET /                  (service banner)
                  GET /health            (process liveness)
                  GET /db/status         (embedded database liveness)
    - users.py:   GET /api/users         (mock user list)
                  GET /api/users/{id}    (mock user by id)

Routes stay thin: they read path parameters, call the graph database when
needed, and shape the JSON response.
"""
