"""ServiceResult and ServiceError: the contract between services and the CLI.

INVARIANT: All service-layer methods return ServiceResult. Domain
``Result`` failures are translated here, keeping the domain error code.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from civiltz.domain.result import CalendarError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, error: CalendarError) -> ServiceError:
        return cls(code=error.code, message=error.message, detail=dict(error.detail))


class ServiceResult(BaseModel):
    """Return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"add_days"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (zone data source, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failed(cls, op: str, error: CalendarError | ServiceError) -> ServiceResult:
        if isinstance(error, CalendarError):
            error = ServiceError.from_domain(error)
        return cls(ok=False, op=op, error=error)
