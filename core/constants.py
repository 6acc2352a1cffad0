"""Common constants shared across pbattach modules."""

import re

ROLE_RESOURCE_TYPE = "AWS::IAM::Role"
BOUNDARY_PROPERTY = "PermissionsBoundary"

DEPLOY_HOOK = "before:deploy:deploy"

BOUNDARY_CONFIG_PATH = ("provider", "permissionsBoundary")
RESOURCES_PATH = ("provider", "compiledCloudFormationTemplate", "Resources")

POLICY_ARN_PATTERN = re.compile(r"arn:aws:iam::([0-9]+|aws):policy/[^\n\r\u2028\u2029]*")
