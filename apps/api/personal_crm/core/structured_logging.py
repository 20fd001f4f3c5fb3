"""Structured logging helpers (PII-safe)."""

from typing import Any


def build_log_context(
    *,
    user_id: str | None = None,
    account_id: str | None = None,
    request_id: str | None = None,
    route: str | None = None,
    method: str | None = None,
    error_code: int | None = None,
) -> dict[str, Any]:
    """Return a PII-safe log context dict."""
    context: dict[str, Any] = {}
    if user_id:
        context["user_id"] = user_id
    if account_id:
        context["account_id"] = account_id
    if request_id:
        context["request_id"] = request_id
    if route:
        context["route"] = route
    if method:
        context["method"] = method
    if error_code is not None:
        context["error_code"] = error_code
    return context
