"""
Pydantic schema definitions for API payloads.

Schemas describe request and response bodies and are kept apart from
the service layer so the API representation can evolve independently
of how records are stored.
"""
