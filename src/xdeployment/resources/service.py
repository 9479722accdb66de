"""Service composer."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from xdeployment.composer.base import BaseComposer
from xdeployment.resources.deployment import NAME_LABEL

SERVICE_PORT = 8080


class ServiceSpec(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    cluster_ip: Optional[str] = Field(None, alias="clusterIP")


class ObservedService(BaseModel):
    model_config = ConfigDict(extra="ignore")

    spec: Optional[ServiceSpec] = None


class ServiceComposer(BaseComposer[ObservedService]):
    """Composes a ClusterIP Service in front of the Deployment.

    Only created when the XDeployment sets a port. The Service listens on
    8080 and forwards to the container port.
    """

    kind = "service"
    condition_type = "ServiceReady"
    observed_model = ObservedService

    def observed_is_ready(self, observed: ObservedService) -> bool:
        return observed.spec is not None and bool(observed.spec.cluster_ip)

    def create_resource(self) -> Optional[Dict[str, Any]]:
        xd = self.ctx.xr

        if xd.spec.port is None:
            self.log.debug("service_skipped_no_port", name=self.resource_name)
            return None

        return {
            "apiVersion": "v1",
            "kind": "Service",
            "metadata": {"name": xd.name},
            "spec": {
                "type": "ClusterIP",
                "selector": {NAME_LABEL: xd.name},
                "ports": [
                    {
                        "name": "http",
                        "protocol": "TCP",
                        "port": SERVICE_PORT,
                        "targetPort": xd.spec.port,
                    }
                ],
            },
        }
