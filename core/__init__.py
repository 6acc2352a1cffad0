"""Core services for attaching IAM permissions boundaries to CloudFormation roles."""

from .boundary import BoundaryAttacher, attach_permissions_boundary
from .errors import ConfigurationError, TemplateError
from .models import BoundaryConfig
from .plugin import PermissionsBoundaryPlugin

__all__ = [
    "BoundaryAttacher",
    "BoundaryConfig",
    "ConfigurationError",
    "PermissionsBoundaryPlugin",
    "TemplateError",
    "attach_permissions_boundary",
]
