"""Provisioner port — the one call the service layer makes to the catalog.

Any object with a matching ``provision`` method satisfies the protocol,
so tests substitute a recording fake for the kubectl adapter.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from svcat.domain.instance import Instance
    from svcat.domain.request import ParameterPayload


class ProvisionerError(RuntimeError):
    """The catalog rejected or failed the provisioning request."""


class Provisioner(Protocol):
    def provision(
        self,
        namespace: str,
        instance_name: str,
        class_name: str,
        plan_name: str,
        parameters: ParameterPayload,
        secrets: dict[str, str],
    ) -> Instance:
        """Create the instance and return it, or raise :class:`ProvisionerError`."""
        ...
