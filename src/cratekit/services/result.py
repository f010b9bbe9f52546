"""What every cratekit operation hands back to the CLI.

INVARIANT: Expected failures (bad paths, commands that cannot start or
exit nonzero, unwritable manifests, broken templates) come back as a
failed ServiceResult carrying an :class:`ErrorCode`; services do not raise.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    INVALID_PATH = "INVALID_PATH"
    INVALID_TEMPLATE = "INVALID_TEMPLATE"
    SPAWN_FAILED = "SPAWN_FAILED"
    COMMAND_FAILED = "COMMAND_FAILED"
    WRITE_FAILED = "WRITE_FAILED"


class ServiceError(BaseModel):
    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of ``make_workspace``, ``plan_workspace`` or ``describe_graph``.

    On success ``data`` holds the payload. On failure ``error`` is set and
    ``data`` stays empty; for ``make_workspace`` the error detail records
    how far the run got. ``warnings`` are non-fatal in both cases.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: ErrorCode,
        message: str,
        *,
        detail: dict[str, Any] | None = None,
        warnings: Iterable[str] = (),
    ) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            warnings=list(warnings),
            error=ServiceError(code=code, message=message, detail=detail or {}),
        )
