# Services package init
"""
Movie API Backend — Services Layer
====================================

What:  Business logic layer sitting between routes (HTTP) and the repository.
How:   Stateless service classes with a module-level singleton each; routes
       pass in the database handle, request path/query and API base URL.

Service Inventory:
    - MovieService, ActorService, RatingService: resource CRUD and listing
    - AuthService: registration and login
    - query_features: query string → QuerySpec (filter, sort, projection, window)
    - pagination: page count and navigation links
    - hateoas: per-record `id` and `links`
    - listing: the shared list pipeline (find + count + links)
"""
