"""FastAPI dependencies for route handlers."""

from fastapi import Request

from app.cqrs.service import CQRSService


def get_cqrs(request: Request) -> CQRSService:
    """Return the dispatch service built at startup."""
    service = getattr(request.app.state, "cqrs", None)
    if service is None:
        raise RuntimeError("CQRS service is not configured")
    return service
