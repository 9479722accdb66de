"""
CLI command for rendering a single function request offline.

Reads a RunFunctionRequest from a YAML or JSON file, runs the composition
and prints the RunFunctionResponse to stdout.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from xdeployment.cli.ux import error, print_table, success
from xdeployment.config import get_settings
from xdeployment.core.errors import (
    ConfigurationError,
    ExitCode,
    InputDecodeError,
    main_with_error_handling,
)
from xdeployment.function.models import RunFunctionRequest, RunFunctionResponse
from xdeployment.function.runner import FunctionRunner


def load_request(path: str | Path) -> RunFunctionRequest:
    """Load a request document. YAML is a superset of JSON so both parse."""
    try:
        with open(path) as f:
            document = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"cannot read request file {path}: {e}") from e

    if not isinstance(document, dict):
        raise InputDecodeError(f"request file {path} does not contain a mapping")

    try:
        return RunFunctionRequest.model_validate(document)
    except ValidationError as e:
        raise InputDecodeError(
            f"request file {path} is not a valid function request",
            details={"errors": e.error_count()},
        ) from e


def dump_response(rsp: RunFunctionResponse, output_format: str = "yaml") -> str:
    document: Dict[str, Any] = rsp.model_dump(mode="json", exclude_none=True)
    if output_format == "json":
        return json.dumps(document, indent=2)
    return yaml.safe_dump(document, sort_keys=False)


def print_conditions(rsp: RunFunctionResponse) -> None:
    rows = [
        [c.type, c.status.value, c.reason, c.message or ""]
        for c in rsp.conditions
    ]
    print_table("Conditions", ["Type", "Status", "Reason", "Message"], rows)


@main_with_error_handling()
def render_command(request_file: str, output_format: str = "yaml", quiet: bool = False) -> int:
    settings = get_settings()
    req = load_request(request_file)

    runner = FunctionRunner(engine_id=settings.engine_id, ttl=settings.response_ttl_seconds)
    rsp = runner.run_function(req)

    print(dump_response(rsp, output_format))

    if not quiet:
        print_conditions(rsp)

    if rsp.failed:
        for result in rsp.results:
            error(result.message)
        return ExitCode.WARNING

    if not quiet:
        success(f"Composed {len(rsp.desired.resources)} resource(s)")
    return ExitCode.SUCCESS
