"""
FastAPI dependency functions
"""
from fastapi import Request

from layoutlens.api.services.store import ProjectStore


def get_store(request: Request) -> ProjectStore:
    """
    Project store owned by the running application.

    Tests swap it out through app.dependency_overrides.
    """
    return request.app.state.store
