"""Command line interface for attaching IAM permissions boundaries to templates."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from cli import config, output
from core.boundary import BoundaryAttacher, role_names, role_statuses
from core.errors import ConfigurationError, TemplateError
from core.models import BoundaryConfig
from core.policy_lookup import BoundaryPolicyChecker
from core.template import dump_template, load_template, template_resources

EXIT_UNBOUNDED_ROLES = 3
EXIT_POLICY_MISSING = 4


class CLIError(Exception):
    def __init__(self, message: str, exit_code: int = 2) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pbattach", description="Attach IAM permissions boundaries to CloudFormation roles")
    parser.add_argument("--config", type=Path, default=Path("pbattach.yml"), help="Path to CLI configuration file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log progress to stderr")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # attach -----------------------------------------------------------------
    attach_cmd = subparsers.add_parser("attach", help="Attach the boundary to every IAM role in a template")
    attach_cmd.add_argument("--template", type=Path, required=True)
    attach_cmd.add_argument("--boundary", help="Permissions boundary policy ARN")
    attach_cmd.add_argument("--output", type=Path, help="Write the template here instead of in place")
    attach_cmd.add_argument("--template-format", choices=["json", "yaml"])
    attach_cmd.add_argument("--format", choices=["json", "md", "table"], help="Output format override")

    # verify -----------------------------------------------------------------
    verify_cmd = subparsers.add_parser("verify", help="Validate a permissions boundary ARN")
    verify_cmd.add_argument("--boundary", help="Permissions boundary policy ARN")
    verify_cmd.add_argument("--format", choices=["json", "md", "table"], help="Output format override")

    # roles ------------------------------------------------------------------
    roles_cmd = subparsers.add_parser("roles", help="List IAM roles and their boundary state")
    roles_cmd.add_argument("--template", type=Path, required=True)
    roles_cmd.add_argument("--boundary", help="Expected permissions boundary policy ARN")
    roles_cmd.add_argument("--template-format", choices=["json", "yaml"])
    roles_cmd.add_argument("--format", choices=["json", "md", "table"], help="Output format override")

    # check ------------------------------------------------------------------
    check_cmd = subparsers.add_parser("check", help="Fail when any IAM role lacks the boundary")
    check_cmd.add_argument("--template", type=Path, required=True)
    check_cmd.add_argument("--boundary", help="Expected permissions boundary policy ARN")
    check_cmd.add_argument("--remote", action="store_true", help="Also confirm the policy exists in IAM")
    check_cmd.add_argument("--template-format", choices=["json", "yaml"])
    check_cmd.add_argument("--format", choices=["json", "md", "table"], help="Output format override")

    return parser


def app(argv: list[str] | None = None, checker: BoundaryPolicyChecker | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    try:
        settings = config.load_settings(args.config).merge_cli(
            boundary_override=getattr(args, "boundary", None),
            format_override=getattr(args, "format", None),
            template_format=getattr(args, "template_format", None),
        )

        if args.command == "attach":
            return _cmd_attach(args, settings)
        if args.command == "verify":
            return _cmd_verify(args, settings)
        if args.command == "roles":
            return _cmd_roles(args, settings)
        if args.command == "check":
            return _cmd_check(args, settings, checker)
    except CLIError as exc:
        print(exc, file=sys.stderr)
        return exc.exit_code
    except (ConfigurationError, TemplateError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except Exception as exc:  # pragma: no cover - unexpected errors bubble up
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


# ---------------------------------------------------------------------------
# Command implementations


def _cmd_attach(args: argparse.Namespace, settings: config.Settings) -> int:
    boundary = _require_boundary(settings)
    template = load_template(args.template, settings.template_format)
    resources = template_resources(template)

    attacher = BoundaryAttacher()
    attacher.attach(BoundaryConfig(permissions_boundary=boundary), resources)

    destination = args.output or args.template
    dump_template(template, destination, settings.template_format)

    summary = {
        "template": str(destination),
        "boundary": boundary,
        "roles": role_names(resources),
    }
    output.emit(summary, settings.default_format)
    return 0


def _cmd_verify(args: argparse.Namespace, settings: config.Settings) -> int:
    boundary = BoundaryAttacher().verify_config(_require_boundary(settings))
    output.emit({"boundary": boundary, "valid": True}, settings.default_format)
    return 0


def _cmd_roles(args: argparse.Namespace, settings: config.Settings) -> int:
    template = load_template(args.template, settings.template_format)
    statuses = role_statuses(template_resources(template), settings.permissions_boundary or "")
    rows = [status.model_dump(mode="json", by_alias=True) for status in statuses]
    output.emit(rows, settings.default_format)
    return 0


def _cmd_check(args: argparse.Namespace, settings: config.Settings, checker: BoundaryPolicyChecker | None) -> int:
    boundary = BoundaryAttacher().verify_config(_require_boundary(settings))
    template = load_template(args.template, settings.template_format)
    statuses = role_statuses(template_resources(template), boundary)
    unbounded = [status.name for status in statuses if not status.bounded]

    payload: dict[str, object] = {
        "boundary": boundary,
        "roles": len(statuses),
        "unbounded": unbounded,
    }

    policy_found = True
    if args.remote:
        checker = checker or BoundaryPolicyChecker()
        policy_found = checker.exists(boundary)
        payload["policyExists"] = policy_found
        if policy_found:
            payload["policy"] = checker.describe(boundary)

    output.emit(payload, settings.default_format)

    if unbounded:
        return EXIT_UNBOUNDED_ROLES
    if not policy_found:
        return EXIT_POLICY_MISSING
    return 0


# ---------------------------------------------------------------------------
# Helpers


def _require_boundary(settings: config.Settings) -> str:
    if not settings.permissions_boundary:
        raise CLIError("A permissions boundary is required: pass --boundary or set permissions_boundary in the config file")
    return settings.permissions_boundary


def main() -> None:
    raise SystemExit(app())


if __name__ == "__main__":
    main()
