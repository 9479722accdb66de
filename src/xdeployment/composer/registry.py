"""Ordered registry of composer classes and its startup validation."""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Type

from xdeployment.composer.base import BaseComposer, ComposableResource
from xdeployment.composer.context import FunctionContext

_KIND_PATTERN = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")


class ComposerRegistry:
    """In-memory registry of composers, kept in registration order.

    The order is the order composers run in, and therefore the order of the
    conditions they report.
    """

    def __init__(self) -> None:
        self._composers: Dict[str, Type[BaseComposer]] = {}
        self._duplicates: List[str] = []

    def register(self, composer: Type[BaseComposer]) -> None:
        """Register a composer class by its kind."""
        if composer.kind in self._composers:
            self._duplicates.append(composer.kind)
        self._composers[composer.kind] = composer

    def get(self, kind: str) -> Optional[Type[BaseComposer]]:
        return self._composers.get(kind)

    def list(self) -> List[str]:
        """List registered kinds in run order."""
        return list(self._composers.keys())

    def build(self, ctx: FunctionContext) -> List[ComposableResource]:
        """Instantiate every composer for one invocation."""
        return [composer(ctx) for composer in self._composers.values()]

    def validate(self) -> List[str]:
        """Check the registry is usable. Returns a list of problems, empty when valid."""
        problems: List[str] = []

        if not self._composers:
            problems.append("no composers registered")

        for kind in self._duplicates:
            problems.append(f"composer kind {kind!r} registered more than once")

        seen_conditions: Dict[str, str] = {}
        for kind, composer in self._composers.items():
            if not _KIND_PATTERN.match(kind):
                problems.append(f"composer kind {kind!r} is not a valid name segment")
            if not composer.condition_type:
                problems.append(f"composer {kind!r} has no condition type")
            elif composer.condition_type in seen_conditions:
                problems.append(
                    f"composers {seen_conditions[composer.condition_type]!r} and {kind!r} "
                    f"share condition type {composer.condition_type!r}"
                )
            else:
                seen_conditions[composer.condition_type] = kind
            if getattr(composer, "observed_model", None) is None:
                problems.append(f"composer {kind!r} has no observed model")

        return problems
