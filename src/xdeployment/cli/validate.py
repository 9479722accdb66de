"""CLI command that runs startup validation of the composer registry."""

from __future__ import annotations

from xdeployment.cli.ux import error, success
from xdeployment.core.errors import ConfigurationError, ExitCode, main_with_error_handling
from xdeployment.resources import default_registry


@main_with_error_handling()
def validate_command() -> int:
    registry = default_registry()
    problems = registry.validate()
    if problems:
        for problem in problems:
            error(problem)
        raise ConfigurationError("composer registry is invalid", details={"problems": problems})

    success(f"Composers ready: {', '.join(registry.list())}")
    return ExitCode.SUCCESS
