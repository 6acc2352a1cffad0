"""CloudFormation macro entrypoint for AWS Lambda."""

from __future__ import annotations

import logging
import os
from typing import Any

from core.boundary import BoundaryAttacher
from core.errors import ConfigurationError, TemplateError
from core.models import BoundaryConfig
from core.template import template_resources

logger = logging.getLogger(__name__)

BOUNDARY_PARAMETER = "PermissionsBoundary"
BOUNDARY_ENV = "PERMISSIONS_BOUNDARY"


def _resolve_boundary(event: dict[str, Any]) -> Any:
    params = event.get("params") or {}
    if params.get(BOUNDARY_PARAMETER):
        return params[BOUNDARY_PARAMETER]
    template_params = event.get("templateParameterValues") or {}
    if template_params.get(BOUNDARY_PARAMETER):
        return template_params[BOUNDARY_PARAMETER]
    return os.getenv(BOUNDARY_ENV)


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    request_id = event.get("requestId")
    fragment = event.get("fragment") or {}

    try:
        config = BoundaryConfig(permissions_boundary=_resolve_boundary(event))
        BoundaryAttacher().attach(config, template_resources(fragment))
    except (ConfigurationError, TemplateError) as exc:
        logger.error("Permissions boundary transform failed: %s", exc)
        return {
            "requestId": request_id,
            "status": "failure",
            "fragment": fragment,
            "errorMessage": str(exc),
        }

    return {
        "requestId": request_id,
        "status": "success",
        "fragment": fragment,
    }
