"""Composer abstraction: context, protocol, helpers and registry."""

from xdeployment.composer.base import (
    BaseComposer,
    ComposableResource,
    DesiredResource,
    convert_observed,
    resource_name,
)
from xdeployment.composer.context import FunctionContext
from xdeployment.composer.registry import ComposerRegistry

__all__ = [
    "BaseComposer",
    "ComposableResource",
    "ComposerRegistry",
    "DesiredResource",
    "FunctionContext",
    "convert_observed",
    "resource_name",
]
