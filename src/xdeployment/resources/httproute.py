"""HTTPRoute composer."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from xdeployment.composer.base import BaseComposer
from xdeployment.resources.service import SERVICE_PORT


class RouteCondition(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str = ""
    status: str = ""


class RouteParentStatus(BaseModel):
    model_config = ConfigDict(extra="ignore")

    conditions: Optional[List[RouteCondition]] = None


class RouteStatus(BaseModel):
    model_config = ConfigDict(extra="ignore")

    parents: Optional[List[RouteParentStatus]] = None


class ObservedHTTPRoute(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: Optional[RouteStatus] = None


class HttpRouteComposer(BaseComposer[ObservedHTTPRoute]):
    """Composes a Gateway API HTTPRoute exposing the Service on a hostname.

    Needs a gateway in the function input plus a port and hostname on the
    XDeployment. Ready once any parent gateway has accepted the route.
    """

    kind = "httproute"
    condition_type = "HttpRouteReady"
    observed_model = ObservedHTTPRoute

    def observed_is_ready(self, observed: ObservedHTTPRoute) -> bool:
        if observed.status is None:
            return False
        for parent in observed.status.parents or []:
            for condition in parent.conditions or []:
                if condition.type == "Accepted" and condition.status == "True":
                    return True
        return False

    def create_resource(self) -> Optional[Dict[str, Any]]:
        xd = self.ctx.xr
        gateway = self.ctx.defaults.gateway

        if gateway is None or not gateway.configured:
            self.log.debug("httproute_skipped_no_gateway", name=self.resource_name)
            return None

        if xd.spec.port is None or not xd.spec.hostname:
            self.log.debug("httproute_skipped_no_port_or_hostname", name=self.resource_name)
            return None

        return {
            "apiVersion": "gateway.networking.k8s.io/v1",
            "kind": "HTTPRoute",
            "metadata": {"name": xd.name},
            "spec": {
                "parentRefs": [{"name": gateway.name, "namespace": gateway.namespace}],
                "hostnames": [xd.spec.hostname],
                "rules": [
                    {
                        "backendRefs": [{"name": xd.name, "port": SERVICE_PORT}],
                    }
                ],
            },
        }
