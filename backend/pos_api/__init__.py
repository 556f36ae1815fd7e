"""
BuffetPOS REST API.

- main: FastAPI application factory
- routers: HTTP endpoints
- services: business logic (table lifecycle, assignment, access codes, users)
- repositories: data access
- models: SQLAlchemy ORM models
"""
