"""Composition function that turns an XDeployment into Kubernetes objects."""

__version__ = "0.1.0"
