"""Resource composers for the XDeployment composite."""

from xdeployment.composer.registry import ComposerRegistry
from xdeployment.resources.deployment import DeploymentComposer
from xdeployment.resources.httproute import HttpRouteComposer
from xdeployment.resources.service import ServiceComposer


def register_default_composers(registry: ComposerRegistry) -> None:
    """Register the built-in composers in the order they run."""
    registry.register(DeploymentComposer)
    registry.register(ServiceComposer)
    registry.register(HttpRouteComposer)


def default_registry() -> ComposerRegistry:
    registry = ComposerRegistry()
    register_default_composers(registry)
    return registry


__all__ = [
    "DeploymentComposer",
    "HttpRouteComposer",
    "ServiceComposer",
    "default_registry",
    "register_default_composers",
]
