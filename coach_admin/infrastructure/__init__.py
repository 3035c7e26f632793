"""
Infrastructure layer - persistence for coach records.

- storage: JSON file (or in-memory mock) holding the whole collection
- repositories: CRUD over the collection in domain terms
"""
