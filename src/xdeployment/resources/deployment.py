"""Deployment composer."""

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from xdeployment.composer.base import BaseComposer

DEFAULT_REPLICAS = 2
NAME_LABEL = "app.kubernetes.io/name"


class DeploymentCondition(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str = ""
    status: str = ""


class DeploymentStatus(BaseModel):
    model_config = ConfigDict(extra="ignore")

    conditions: Optional[List[DeploymentCondition]] = None


class ObservedDeployment(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: Optional[DeploymentStatus] = None


class DeploymentComposer(BaseComposer[ObservedDeployment]):
    """Composes an apps/v1 Deployment running the XDeployment's image.

    Ready once the observed Deployment reports Available=True, meaning the
    minimum number of replicas are running.
    """

    kind = "deployment"
    condition_type = "DeploymentReady"
    observed_model = ObservedDeployment

    def observed_is_ready(self, observed: ObservedDeployment) -> bool:
        if observed.status is None:
            return False
        for condition in observed.status.conditions or []:
            if condition.type == "Available" and condition.status == "True":
                return True
        return False

    def create_resource(self) -> Optional[Dict[str, Any]]:
        xd = self.ctx.xr

        replicas = xd.spec.replicas
        if replicas is None:
            self.log.debug("replicas_defaulted", name=self.resource_name, replicas=DEFAULT_REPLICAS)
            replicas = DEFAULT_REPLICAS

        container: Dict[str, Any] = {
            "name": xd.name,
            "image": xd.spec.image,
            "env": convert_env_vars(xd.spec.env),
        }
        if xd.spec.port is not None:
            container["ports"] = [{"name": "http", "containerPort": xd.spec.port}]

        return {
            "apiVersion": "apps/v1",
            "kind": "Deployment",
            "metadata": {"name": xd.name},
            "spec": {
                "replicas": replicas,
                "selector": {"matchLabels": {NAME_LABEL: xd.name}},
                "template": {
                    "metadata": {"name": xd.name, "labels": {NAME_LABEL: xd.name}},
                    "spec": {"containers": [container]},
                },
            },
        }


def convert_env_vars(env: Optional[Mapping[str, str]]) -> List[Dict[str, str]]:
    """Convert an env mapping to container env entries sorted by name.

    Sorting keeps the rendered Deployment identical across reconciles no
    matter how the mapping was ordered.
    """
    if not env:
        return []
    return [{"name": key, "value": env[key]} for key in sorted(env)]
