"""
Blog API — Application Package Initializer
===========================================

What: Marks the `blog_api` directory as a Python package.
Why:  Enables module imports like `from blog_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The service is a thin mapping from HTTP to a document store:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, status codes
    ├─────────────────────────────────────┤
    │      Schemas (Wire Shapes)          │  ← Pydantic bodies + serialize_post()
    ├─────────────────────────────────────┤
    │    Services (Document Store Adapter)│  ← One MongoDB call per operation
    ├─────────────────────────────────────┤
    │   Models (Stored Document Shape)    │  ← BlogPost / Author
    ├─────────────────────────────────────┤
    │       Database (Connection)         │  ← AsyncMongoClient lifecycle
    └─────────────────────────────────────┘

    The stored shape (author as {firstName, lastName}) and the wire shape
    (author as "first last") are separate models joined by one mapping
    function, so either can change without the other.
"""

__version__ = "1.0.0"
