"""Starter API - FastAPI + SQLAlchemy server with a gated startup sequence"""

__version__ = "1.0.0"
