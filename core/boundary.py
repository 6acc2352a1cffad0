"""Attach an IAM permissions boundary to every role in a compiled template."""

from __future__ import annotations

import logging
from typing import Any, Mapping, MutableMapping

from core.constants import BOUNDARY_PROPERTY, POLICY_ARN_PATTERN, ROLE_RESOURCE_TYPE
from core.errors import ConfigurationError, TemplateError
from core.models import BoundaryConfig, RoleStatus

logger = logging.getLogger(__name__)

Resources = MutableMapping[str, Any]


def _is_role(definition: Any) -> bool:
    return isinstance(definition, Mapping) and definition.get("Type") == ROLE_RESOURCE_TYPE


def role_names(resources: Mapping[str, Any] | None) -> list[str]:
    """Return the sorted logical names of IAM role resources."""
    if not resources:
        return []
    return sorted(name for name, definition in resources.items() if _is_role(definition))


def role_statuses(resources: Mapping[str, Any] | None, boundary: str) -> list[RoleStatus]:
    statuses: list[RoleStatus] = []
    for name in role_names(resources):
        properties = resources[name].get("Properties") or {}  # type: ignore[index]
        current = properties.get(BOUNDARY_PROPERTY) if isinstance(properties, Mapping) else None
        statuses.append(RoleStatus(name=name, boundary=current, bounded=current == boundary))
    return statuses


def find_unbounded_roles(resources: Mapping[str, Any] | None, boundary: str) -> list[str]:
    """Return role names whose PermissionsBoundary is not ``boundary``."""
    return [status.name for status in role_statuses(resources, boundary) if not status.bounded]


class BoundaryAttacher:
    """Validate a boundary ARN and write it onto IAM role resources in place."""

    def __init__(self) -> None:
        self.permissions_boundary: str | None = None

    def verify_config(self, value: Any) -> str:
        # Only a single boundary can be attached to a role.
        if not isinstance(value, str):
            raise ConfigurationError("permissionsBoundary must be a single policy ARN", value=value)
        if not POLICY_ARN_PATTERN.fullmatch(value):
            raise ConfigurationError(f'"{value}" is not a valid policy ARN.', value=value)
        self.permissions_boundary = value
        return value

    def apply_to_role(self, properties: MutableMapping[str, Any]) -> None:
        properties[BOUNDARY_PROPERTY] = self.permissions_boundary

    def attach(
        self,
        config: BoundaryConfig | Mapping[str, Any] | None,
        resources: Resources | None,
    ) -> None:
        """Attach the configured boundary to every ``AWS::IAM::Role`` in ``resources``.

        Nothing happens when no boundary is configured or there are no
        resources. Validation runs before the first role is touched, so a
        ConfigurationError or TemplateError leaves ``resources`` unchanged.
        """
        boundary = BoundaryConfig.from_source(config).permissions_boundary
        if not boundary:
            return
        if not resources:
            return

        self.verify_config(boundary)
        roles = role_names(resources)
        for name in roles:
            properties = resources[name].get("Properties")
            if properties is not None and not isinstance(properties, MutableMapping):
                raise TemplateError(f"Properties of role {name} must be a mapping.")

        logger.info("Begin Attach Permission Boundary plugin...")
        for name in roles:
            definition = resources[name]
            properties = definition.get("Properties")
            if properties is None:
                properties = definition["Properties"] = {}
            self.apply_to_role(properties)
            logger.debug("Attached %s to %s", self.permissions_boundary, name)
        logger.info("Attach Permission Boundary plugin done.")


def attach_permissions_boundary(
    config: BoundaryConfig | Mapping[str, Any] | None,
    resources: Resources | None,
) -> None:
    BoundaryAttacher().attach(config, resources)


__all__ = [
    "BoundaryAttacher",
    "attach_permissions_boundary",
    "find_unbounded_roles",
    "role_names",
    "role_statuses",
]
