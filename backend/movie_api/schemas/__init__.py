"""
Movie API Backend — Pydantic Schemas
======================================

What:  The API contract: request bodies per resource and the shared response
       envelopes (linked records, pagination, errors, health).
"""
