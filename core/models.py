"""Data models shared across the attacher, CLI and macro handler."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, Field


class BoundaryConfig(BaseModel):
    """Provider-level configuration read by the boundary attacher."""

    permissions_boundary: Any = Field(
        default=None,
        alias="permissionsBoundary",
        description="Policy ARN attached as PermissionsBoundary to every IAM role",
    )

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }

    @classmethod
    def from_source(cls, source: "BoundaryConfig | Mapping[str, Any] | None") -> "BoundaryConfig":
        if source is None:
            return cls()
        if isinstance(source, cls):
            return source
        return cls.model_validate(dict(source))


class RoleStatus(BaseModel):
    """Boundary state of a single role resource in a template."""

    name: str = Field(..., alias="role")
    boundary: Any = None
    bounded: bool = False

    model_config = {
        "populate_by_name": True,
    }


__all__ = ["BoundaryConfig", "RoleStatus"]
