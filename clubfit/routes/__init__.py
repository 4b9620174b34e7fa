"""
FastAPI routers for all API endpoints.

Each module defines a router for one concern (recommendations, image proxy,
catalog setup, health). Errors are returned as {"message": ...} bodies.
"""
