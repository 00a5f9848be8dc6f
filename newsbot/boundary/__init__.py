"""
Boundary layer for external system integrations.

Handles all interactions with external systems (Redis, Qdrant, model APIs).
Provides adapters and clients for infrastructure dependencies.
"""
