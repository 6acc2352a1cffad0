"""Lifecycle hook adapter between a deployment host and the boundary attacher."""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Mapping

from core.boundary import BoundaryAttacher
from core.constants import BOUNDARY_CONFIG_PATH, DEPLOY_HOOK, RESOURCES_PATH
from core.models import BoundaryConfig

Hook = Callable[[], None]


def resolve_path(source: Any, path: Iterable[str]) -> Any:
    """Walk ``path`` through mappings or attributes, returning None on a gap."""
    current = source
    for segment in path:
        if current is None:
            return None
        if isinstance(current, Mapping):
            current = current.get(segment)
        else:
            current = getattr(current, segment, None)
    return current


class PermissionsBoundaryPlugin:
    """Registers the boundary attacher for the host's pre-deploy event.

    ``service`` is the host's service description. It is only read when the
    hook fires, so the host may finish compiling the template after the
    plugin has been constructed.
    """

    def __init__(self, service: Any, attacher: BoundaryAttacher | None = None) -> None:
        self.service = service
        self.attacher = attacher or BoundaryAttacher()
        self.hooks: Dict[str, Hook] = {
            DEPLOY_HOOK: self.attach_permissions_boundary,
        }

    def attach_permissions_boundary(self) -> None:
        config = BoundaryConfig(permissions_boundary=resolve_path(self.service, BOUNDARY_CONFIG_PATH))
        resources = resolve_path(self.service, RESOURCES_PATH)
        self.attacher.attach(config, resources)

    def run_hook(self, name: str) -> None:
        hook = self.hooks.get(name)
        if hook is None:
            raise KeyError(f"No hook registered for {name}")
        hook()


__all__ = ["PermissionsBoundaryPlugin", "resolve_path"]
