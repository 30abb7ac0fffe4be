"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: All service-layer methods return ServiceResult.
Failures are reported as data, never raised to the caller.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult.

    Attributes:
        code: Machine-readable error category (e.g. ``"UNKNOWN_SHAPE"``).
        label: Short human label of what failed.
        message: Longer explanation, including any wrapped library diagnostic.
        source: The input or parameter the error refers to (``"input"``,
            ``"shape"``, ``"width"``...).
        detail: Extra structured context.
    """

    model_config = {"frozen": True}

    code: str
    label: str
    message: str
    source: str | None = None
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (``"decode"`` or ``"encode"``).
        data: Operation-specific payload on success. Byte values are
            serialized as base64 in JSON.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, counts, etc.).
    """

    model_config = {"frozen": True, "ser_json_bytes": "base64"}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        *,
        code: str,
        label: str,
        message: str,
        source: str | None = None,
        detail: dict[str, Any] | None = None,
    ) -> ServiceResult:
        """Shorthand for a failed result carrying a single ServiceError."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError(
                code=code,
                label=label,
                message=message,
                source=source,
                detail=detail or {},
            ),
        )
