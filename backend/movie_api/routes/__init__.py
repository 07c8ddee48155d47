# Routes package init
"""
Movie API Backend — API Routes Package
========================================

What:  HTTP route handlers; thin wrappers over the services layer.

Route Inventory:
    - index.py:    GET  /                          (endpoint map)
    - health.py:   GET  /health                    (service + MongoDB status)
    - auth.py:     POST /api/v1/auth/register, /api/v1/auth/login
    - movies.py:   /api/v1/movies, /api/v1/movies/{id}, /api/v1/movies/{id}/ratings
    - actors.py:   /api/v1/actors, /api/v1/actors/{id}
    - ratings.py:  /api/v1/ratings, /api/v1/ratings/{id}

Design Principle:
    Routes handle HTTP concerns only (path, query string, body, status code,
    authentication dependency). Business rules belong to the services.

List endpoints read the raw query string instead of declaring Query()
parameters: the filter language accepts any field name and bracketed
operators (`releaseYear[gte]=2000`), which a fixed signature cannot express.
"""
