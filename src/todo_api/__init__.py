"""
Todo API package.

A minimal FastAPI service exposing CRUD operations over an in-memory
collection of todos. The ASGI application lives at ``todo_api.main:app``;
``create_app`` builds additional isolated instances (used by the tests).
"""

__version__ = "0.1.0"
