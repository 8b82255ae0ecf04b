"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, svcat.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel

from svcat.domain.request import DEFAULT_NAMESPACE


class ProvisionConfig(BaseModel):
    """[provision] section."""

    model_config = {"frozen": True}

    namespace: str = DEFAULT_NAMESPACE


class KubectlConfig(BaseModel):
    """[kubectl] section.

    Attributes:
        binary: kubectl executable name or path.
        kubeconfig: Explicit kubeconfig file, or None for kubectl's default.
        context: kubeconfig context to use, or None for the current one.
        timeout_seconds: Wall-clock limit for one kubectl call, or None.
    """

    model_config = {"frozen": True}

    binary: str = "kubectl"
    kubeconfig: str | None = None
    context: str | None = None
    timeout_seconds: float | None = None
