"""Shared pytest fixtures and test helpers for svcat tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from svcat.domain.instance import Instance, InstanceCondition
from svcat.infrastructure.provisioner import ProvisionerError


@dataclass
class RecordingProvisioner:
    """Provisioner stand-in that records calls instead of touching a cluster.

    Set ``error`` to make every call raise a ProvisionerError with that message.
    """

    error: str | None = None
    calls: list[dict[str, Any]] = field(default_factory=list)

    def provision(
        self,
        namespace: str,
        instance_name: str,
        class_name: str,
        plan_name: str,
        parameters: Any,
        secrets: dict[str, str],
    ) -> Instance:
        self.calls.append(
            {
                "namespace": namespace,
                "instance_name": instance_name,
                "class_name": class_name,
                "plan_name": plan_name,
                "parameters": parameters,
                "secrets": dict(secrets),
            }
        )
        if self.error is not None:
            raise ProvisionerError(self.error)
        wire = None if parameters.is_empty() else parameters.to_wire()
        return Instance(
            name=instance_name,
            namespace=namespace,
            uid="6f1e0c1a-0000-4000-8000-000000000001",
            class_name=class_name,
            plan_name=plan_name,
            parameters=wire,
            secrets=dict(secrets),
            conditions=[
                InstanceCondition(
                    type="Ready",
                    status="False",
                    reason="ProvisionRequestInFlight",
                    message="Provision request for ServiceInstance in-flight to Broker",
                )
            ],
        )


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def provisioner() -> RecordingProvisioner:
    """A recording provisioner that always succeeds."""
    return RecordingProvisioner()


@pytest.fixture
def _fake_cluster(
    provisioner: RecordingProvisioner,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Route the CLI's provisioner to the recording fake and isolate config.

    Use via ``@pytest.mark.usefixtures("_fake_cluster")`` on command test
    classes; request ``provisioner`` to inspect the recorded calls.
    """
    from svcat.infrastructure import kubectl

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SVCAT_CONFIG", raising=False)
    monkeypatch.setattr(kubectl, "KubectlProvisioner", lambda config: provisioner)
