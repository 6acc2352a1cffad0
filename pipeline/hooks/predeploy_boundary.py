#!/usr/bin/env python3
"""Pre-deploy verification that every IAM role carries the permissions boundary."""

from __future__ import annotations

import argparse
from pathlib import Path

from core.boundary import BoundaryAttacher, find_unbounded_roles, role_names
from core.errors import ConfigurationError, TemplateError
from core.models import BoundaryConfig
from core.template import dump_template, load_template, template_resources


def verify_template(template_path: Path, boundary: str, attach: bool = False) -> list[str]:
    attacher = BoundaryAttacher()
    try:
        attacher.verify_config(boundary)
        template = load_template(template_path)
    except (ConfigurationError, TemplateError) as exc:
        raise SystemExit(str(exc)) from exc

    resources = template_resources(template)
    if attach:
        attacher.attach(BoundaryConfig(permissions_boundary=boundary), resources)
        dump_template(template, template_path)

    unbounded = find_unbounded_roles(resources, boundary)
    if unbounded:
        raise SystemExit(f"Roles missing permissions boundary {boundary}: {', '.join(unbounded)}")
    return role_names(resources)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description='Verify IAM roles carry the permissions boundary before deploy')
    parser.add_argument('--template', required=True, type=Path)
    parser.add_argument('--boundary', required=True)
    parser.add_argument('--attach', action='store_true', help='Attach the boundary in place before verifying')
    args = parser.parse_args(argv)

    verify_template(args.template, args.boundary, attach=args.attach)

    print('Permissions boundary verification passed.')


if __name__ == '__main__':
    main()
