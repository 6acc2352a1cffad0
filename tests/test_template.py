"""Template loading and rendering tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from core.errors import TemplateError
from core.template import dump_template, load_template, parse_template, template_resources

FIXTURE = Path(__file__).parent / "fixtures" / "templates" / "service.yml"


def test_load_yaml_template_expands_short_form_tags():
    template = load_template(FIXTURE)
    resources = template_resources(template)

    assert resources["HelloLambdaFunction"]["Properties"]["Role"] == {
        "Fn::GetAtt": ["IamRoleLambdaExecution", "Arn"]
    }
    assert resources["IamRoleLambdaExecution"]["Properties"]["RoleName"] == {
        "Fn::Sub": "${AWS::StackName}-lambdaRole"
    }
    assert template["Outputs"]["BucketName"]["Value"] == {"Ref": "ServerlessDeploymentBucket"}


def test_parse_template_handles_sequence_tags():
    template = parse_template("Value: !Join ['-', [a, b]]\n")
    assert template == {"Value": {"Fn::Join": ["-", ["a", "b"]]}}


def test_dump_template_json_and_yaml(tmp_path):
    template = load_template(FIXTURE)

    json_path = tmp_path / "out.json"
    dump_template(template, json_path)
    assert json.loads(json_path.read_text(encoding="utf-8")) == template

    yaml_path = tmp_path / "out.yaml"
    dump_template(template, yaml_path)
    reloaded = yaml.safe_load(yaml_path.read_text(encoding="utf-8"))
    assert reloaded == template
    assert list(reloaded) == list(template)


def test_load_template_missing_file(tmp_path):
    with pytest.raises(TemplateError, match="not found"):
        load_template(tmp_path / "missing.json")


def test_load_template_rejects_non_mapping(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(TemplateError, match="mapping"):
        load_template(path)


def test_load_template_reports_parse_errors(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(TemplateError, match="Unable to parse"):
        load_template(path)


def test_template_resources_returns_same_mapping():
    template = {"Resources": {"A": {"Type": "AWS::IAM::Role"}}}
    assert template_resources(template) is template["Resources"]
    assert template_resources({}) is None
    with pytest.raises(TemplateError):
        template_resources({"Resources": ["A"]})


def test_unquoted_dates_load_as_strings_and_render_as_json():
    template = parse_template("AWSTemplateFormatVersion: 2010-09-09\nPolicy:\n  Version: 2012-10-17\n")
    assert template == {"AWSTemplateFormatVersion": "2010-09-09", "Policy": {"Version": "2012-10-17"}}
    assert json.loads(dump_template(template, fmt="json")) == template


def test_unquoted_dates_stay_strings_through_yaml():
    template = parse_template("AWSTemplateFormatVersion: 2010-09-09\n")
    rendered = dump_template(template, fmt="yaml")
    assert parse_template(rendered) == {"AWSTemplateFormatVersion": "2010-09-09"}
