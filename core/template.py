"""Read and write CloudFormation templates in JSON or YAML."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, MutableMapping, Optional

import yaml

from core.errors import TemplateError

JSON_SUFFIXES = {".json", ".template"}
BARE_TAGS = {"Ref", "Condition"}
TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class CloudFormationLoader(yaml.SafeLoader):
    """SafeLoader that understands CloudFormation short-form intrinsic tags."""


def _construct_intrinsic(loader: yaml.SafeLoader, tag_suffix: str, node: yaml.Node) -> dict[str, Any]:
    key = tag_suffix if tag_suffix in BARE_TAGS else f"Fn::{tag_suffix}"
    if isinstance(node, yaml.ScalarNode):
        value: Any = loader.construct_scalar(node)
        if tag_suffix == "GetAtt":
            value = value.split(".", 1)
    elif isinstance(node, yaml.SequenceNode):
        value = loader.construct_sequence(node, deep=True)
    else:
        value = loader.construct_mapping(node, deep=True)
    return {key: value}


CloudFormationLoader.add_multi_constructor("!", _construct_intrinsic)

# CloudFormation reads dates such as `Version: 2012-10-17` as plain strings.
CloudFormationLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def detect_format(path: Path | None, fmt: Optional[str] = None) -> str:
    if fmt:
        return fmt
    if path is not None and path.suffix.lower() in JSON_SUFFIXES:
        return "json"
    return "yaml"


def parse_template(text: str, fmt: str = "yaml", source: str | None = None) -> dict[str, Any]:
    try:
        if fmt == "json":
            data = json.loads(text)
        else:
            data = yaml.load(text, Loader=CloudFormationLoader)  # noqa: S506 - SafeLoader subclass
    except (ValueError, yaml.YAMLError) as exc:
        raise TemplateError(f"Unable to parse template {source or '<string>'}: {exc}", path=source) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise TemplateError("Template must be a mapping at the top level.", path=source)
    return data


def load_template(path: Path, fmt: Optional[str] = None) -> dict[str, Any]:
    if not path.exists():
        raise TemplateError(f"Template not found: {path}", path=str(path))
    text = path.read_text(encoding="utf-8")
    return parse_template(text, detect_format(path, fmt), source=str(path))


def dump_template(template: dict[str, Any], path: Path | None = None, fmt: Optional[str] = None) -> str:
    fmt = detect_format(path, fmt)
    if fmt == "json":
        rendered = json.dumps(template, indent=2)
    elif fmt == "yaml":
        rendered = yaml.safe_dump(template, sort_keys=False, default_flow_style=False)
    else:
        raise ValueError(f"Unsupported template format: {fmt}")

    if path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(rendered + ("\n" if not rendered.endswith("\n") else ""), encoding="utf-8")
    return rendered


def template_resources(template: dict[str, Any] | None) -> MutableMapping[str, Any] | None:
    if not template:
        return None
    resources = template.get("Resources")
    if resources is not None and not isinstance(resources, dict):
        raise TemplateError("Template Resources must be a mapping.")
    return resources


__all__ = [
    "CloudFormationLoader",
    "detect_format",
    "dump_template",
    "load_template",
    "parse_template",
    "template_resources",
]
