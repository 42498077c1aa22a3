"""The result envelope every SkeletonService operation returns.

Core code raises SkelError; the service layer catches it and reports it
here as ``ok=False`` with a ServiceError, so callers branch on ``ok``
instead of on exception types.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from skel.domain.errors import SkelError


class ServiceError(BaseModel):
    """Why an operation failed: stable code, message, structured detail."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: SkelError) -> ServiceError:
        return cls(code=exc.code, message=str(exc), detail=exc.detail())


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: True when the operation completed.
        op: Operation name, used to pick a renderer (``"plan"``, ``"task"``...).
        data: Operation payload; empty on failure.
        warnings: Problems that did not stop the operation.
        error: Set exactly when ``ok`` is False.
        meta: Config file and timing, shown with ``--verbose``.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
