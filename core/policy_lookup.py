"""Confirm that a permissions boundary policy exists in IAM."""

from __future__ import annotations

from typing import Any

import boto3
from botocore.exceptions import ClientError


class BoundaryPolicyChecker:
    """Look up managed policies through the IAM API."""

    def __init__(self, client: Any | None = None) -> None:
        self._client = client or boto3.client("iam")

    def exists(self, policy_arn: str) -> bool:
        try:
            self._client.get_policy(PolicyArn=policy_arn)
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") == "NoSuchEntity":
                return False
            raise
        return True

    def describe(self, policy_arn: str) -> dict[str, Any]:
        policy = self._client.get_policy(PolicyArn=policy_arn)["Policy"]
        return {
            "arn": policy.get("Arn", policy_arn),
            "name": policy.get("PolicyName"),
            "path": policy.get("Path", "/"),
            "defaultVersion": policy.get("DefaultVersionId"),
            "attachmentCount": policy.get("AttachmentCount", 0),
            "boundaryUsageCount": policy.get("PermissionsBoundaryUsageCount", 0),
        }


__all__ = ["BoundaryPolicyChecker"]
