"""Root test configuration."""

import logging

import pytest
import structlog
from xdeployment.composer.context import FunctionContext
from xdeployment.domain.models import XDeployment, XDeploymentDefaults
from xdeployment.function.models import RunFunctionRequest


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def make_xr(name="test-app", **spec):
    """Build an XDeployment composite as it arrives on the wire."""
    spec.setdefault("image", "nginx:latest")
    return {
        "apiVersion": "platform.example.com/v1alpha1",
        "kind": "XDeployment",
        "metadata": {"name": name},
        "spec": spec,
    }


def make_request(xr, input=None, observed=None, desired=None, tag="test"):
    """Build a RunFunctionRequest around an XR and optional observed resources."""
    return RunFunctionRequest.model_validate(
        {
            "meta": {"tag": tag},
            "input": input,
            "observed": {
                "composite": {"resource": xr},
                "resources": {name: {"resource": body} for name, body in (observed or {}).items()},
            },
            "desired": {
                "composite": {"resource": xr},
                "resources": desired or {},
            },
        }
    )


def make_context(xr=None, defaults=None, observed=None):
    return FunctionContext.build(
        xr=XDeployment.model_validate(xr or make_xr()),
        defaults=XDeploymentDefaults.model_validate(defaults or {}),
        observed=observed or {},
        log=structlog.get_logger(),
    )


@pytest.fixture
def gateway_input():
    return {
        "apiVersion": "template.fn.crossplane.io/v1beta1",
        "kind": "XDeploymentDefaults",
        "gateway": {"name": "my-gateway", "namespace": "gateway-ns"},
    }


@pytest.fixture
def full_xr():
    return make_xr(port=8080, hostname="test.example.com")
