"""Tests for the xdeployment CLI.

Tests render and validate commands, request file loading and exit codes.
"""

import json
from unittest.mock import patch

import pytest
import yaml
from conftest import make_request, make_xr
from xdeployment.cli import build_parser, main
from xdeployment.cli.render import dump_response, load_request, render_command
from xdeployment.cli.validate import validate_command
from xdeployment.composer.registry import ComposerRegistry
from xdeployment.core.errors import ConfigurationError, ExitCode, InputDecodeError
from xdeployment.function.runner import FunctionRunner


@pytest.fixture
def request_file(tmp_path, gateway_input):
    req = make_request(make_xr(port=8080, hostname="test.example.com"), input=gateway_input)
    path = tmp_path / "request.yaml"
    path.write_text(yaml.safe_dump(req.model_dump(mode="json", exclude_none=True)))
    return path


class TestLoadRequest:
    """Tests for load_request."""

    def test_yaml(self, request_file):
        req = load_request(request_file)

        assert req.meta.tag == "test"
        assert req.observed.composite.resource["metadata"]["name"] == "test-app"

    def test_json(self, tmp_path):
        path = tmp_path / "request.json"
        path.write_text(json.dumps({"meta": {"tag": "j"}}))

        assert load_request(path).meta.tag == "j"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_request(tmp_path / "nope.yaml")

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(InputDecodeError):
            load_request(path)

    def test_invalid_request(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("observed:\n  resources: [1, 2]\n")

        with pytest.raises(InputDecodeError):
            load_request(path)


class TestRenderCommand:
    """Tests for render_command."""

    def test_renders_yaml(self, request_file, capsys):
        exit_code = render_command(str(request_file), quiet=True)

        assert exit_code == ExitCode.SUCCESS
        document = yaml.safe_load(capsys.readouterr().out)
        assert len(document["desired"]["resources"]) == 3
        assert [c["type"] for c in document["conditions"]] == [
            "DeploymentReady",
            "ServiceReady",
            "HttpRouteReady",
        ]

    def test_renders_json(self, request_file, capsys):
        exit_code = render_command(str(request_file), output_format="json", quiet=True)

        assert exit_code == ExitCode.SUCCESS
        document = json.loads(capsys.readouterr().out)
        assert document["meta"]["tag"] == "test"

    def test_summary_goes_to_stderr(self, request_file, capsys):
        render_command(str(request_file))

        captured = capsys.readouterr()
        assert "Composed 3 resource(s)" in captured.err
        assert "Composed" not in captured.out

    def test_fatal_response_is_warning(self, tmp_path, capsys):
        path = tmp_path / "request.yaml"
        req = make_request(make_xr(), input={"gateway": "nope"})
        path.write_text(yaml.safe_dump(req.model_dump(mode="json", exclude_none=True)))

        exit_code = render_command(str(path), quiet=True)

        assert exit_code == ExitCode.WARNING
        assert "InternalError" in capsys.readouterr().out

    def test_missing_file_exit_code(self, tmp_path):
        assert render_command(str(tmp_path / "missing.yaml")) == ExitCode.CONFIG_ERROR


class TestDumpResponse:
    """Tests for dump_response."""

    def test_omits_empty_messages(self):
        rsp = FunctionRunner().run_function(make_request(make_xr()))
        rsp.conditions[0].message = None

        document = yaml.safe_load(dump_response(rsp))

        assert "message" not in document["conditions"][0]


class TestValidateCommand:
    """Tests for validate_command."""

    def test_valid(self, capsys):
        assert validate_command() == ExitCode.SUCCESS
        assert "deployment, service, httproute" in capsys.readouterr().err

    def test_invalid_registry(self, capsys):
        with patch("xdeployment.cli.validate.default_registry", return_value=ComposerRegistry()):
            exit_code = validate_command()

        assert exit_code == ExitCode.CONFIG_ERROR
        assert "no composers registered" in capsys.readouterr().err


class TestMain:
    """Tests for the argparse entry point."""

    def test_parser_render_defaults(self):
        args = build_parser().parse_args(["render", "req.yaml"])

        assert args.command == "render"
        assert args.output == "yaml"
        assert args.quiet is False

    def test_main_render_exits_with_code(self, request_file):
        with patch("xdeployment.cli.configure_logging"):
            with pytest.raises(SystemExit) as exc_info:
                main(["render", str(request_file), "--quiet"])

        assert exc_info.value.code == ExitCode.SUCCESS

    def test_main_without_command(self):
        with patch("xdeployment.cli.configure_logging"):
            with pytest.raises(SystemExit) as exc_info:
                main([])

        assert exc_info.value.code == 1
