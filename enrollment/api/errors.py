"""Turn validation failures into the short messages shown in admin toasts."""

from fastapi import HTTPException


def describe_errors(errors) -> str:
    parts = []
    for error in errors:
        location = ".".join(str(p) for p in error.get("loc", ()) if p not in ("body", "query", "path"))
        message = error.get("msg", "Invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"


def bad_request(exc) -> HTTPException:
    """400 for a pydantic ``ValidationError`` raised while merging an update."""
    return HTTPException(status_code=400, detail=describe_errors(exc.errors()))
