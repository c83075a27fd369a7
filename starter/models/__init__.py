"""
Pydantic DTOs for request bodies and responses.

Kept apart from the ORM models in `starter.database` so controllers only
deal with validated data.
"""
