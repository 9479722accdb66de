"""Typed views of the XDeployment composite and the function input."""

from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ObjectMeta(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    namespace: Optional[str] = None


class XDeploymentSpec(BaseModel):
    """User-facing fields of an XDeployment."""

    model_config = ConfigDict(extra="ignore")

    image: str
    replicas: Optional[int] = None
    port: Optional[int] = None
    hostname: Optional[str] = None
    env: Optional[Dict[str, str]] = None


class XDeployment(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    api_version: str = Field("", alias="apiVersion")
    kind: str = ""
    metadata: ObjectMeta
    spec: XDeploymentSpec

    @property
    def name(self) -> str:
        return self.metadata.name


class GatewayConfig(BaseModel):
    """Gateway every generated HTTPRoute attaches to."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    namespace: str = ""

    @property
    def configured(self) -> bool:
        return bool(self.name and self.namespace)


class XDeploymentDefaults(BaseModel):
    """Function input supplied by the Composition pipeline step."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    api_version: str = Field("", alias="apiVersion")
    kind: str = ""
    gateway: Optional[GatewayConfig] = None
