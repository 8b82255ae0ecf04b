"""KubectlProvisioner — creates ServiceInstance objects through kubectl.

The manifest is piped to ``kubectl create --filename -`` and the created
object is read back from ``--output json``. Every failure mode (missing
binary, non-zero exit, timeout, unreadable output) surfaces as a single
:class:`ProvisionerError` carrying kubectl's own message.
"""

from __future__ import annotations

import json
import logging
import subprocess
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from svcat.domain.instance import Instance
from svcat.infrastructure.provisioner import ProvisionerError

if TYPE_CHECKING:
    from svcat.config.models import KubectlConfig
    from svcat.domain.request import ParameterPayload

logger = logging.getLogger(__name__)

API_VERSION = "servicecatalog.k8s.io/v1beta1"
KIND = "ServiceInstance"


def build_instance_manifest(
    namespace: str,
    instance_name: str,
    class_name: str,
    plan_name: str,
    parameters: ParameterPayload,
    secrets: dict[str, str],
) -> dict[str, Any]:
    """Build the ServiceInstance object for a provisioning request.

    An empty flat parameter mapping leaves ``spec.parameters`` unset.
    Secret references are emitted sorted by secret name.
    """
    spec: dict[str, Any] = {
        "clusterServiceClassExternalName": class_name,
        "clusterServicePlanExternalName": plan_name,
    }
    if not parameters.is_empty():
        spec["parameters"] = parameters.to_wire()
    if secrets:
        spec["parametersFrom"] = [
            {"secretKeyRef": {"name": name, "key": key}} for name, key in sorted(secrets.items())
        ]
    return {
        "apiVersion": API_VERSION,
        "kind": KIND,
        "metadata": {"name": instance_name, "namespace": namespace},
        "spec": spec,
    }


class KubectlProvisioner:
    """Provisioner backed by the kubectl binary."""

    def __init__(self, config: KubectlConfig) -> None:
        self._config = config

    def provision(
        self,
        namespace: str,
        instance_name: str,
        class_name: str,
        plan_name: str,
        parameters: ParameterPayload,
        secrets: dict[str, str],
    ) -> Instance:
        manifest = build_instance_manifest(
            namespace, instance_name, class_name, plan_name, parameters, secrets
        )
        create_args = ["create", "--namespace", namespace, "--output", "json", "--filename", "-"]
        proc = self._run_kubectl(*create_args, stdin=json.dumps(manifest))
        try:
            created = json.loads(proc.stdout)
        except json.JSONDecodeError as exc:
            raise ProvisionerError(
                f"provision request failed (unreadable kubectl output: {exc})"
            ) from exc
        if not isinstance(created, dict):
            raise ProvisionerError(
                "provision request failed "
                f"(unexpected kubectl output: expected an object, got {type(created).__name__})"
            )
        try:
            return Instance.from_manifest(created)
        except (AttributeError, TypeError, ValidationError) as exc:
            raise ProvisionerError(
                f"provision request failed (unexpected kubectl output: {exc})"
            ) from exc

    # ------------------------------------------------------------------
    # kubectl subprocess helpers
    # ------------------------------------------------------------------

    def _global_args(self) -> list[str]:
        args: list[str] = []
        if self._config.kubeconfig:
            args += ["--kubeconfig", self._config.kubeconfig]
        if self._config.context:
            args += ["--context", self._config.context]
        return args

    def _run_kubectl(self, *args: str, stdin: str | None = None) -> subprocess.CompletedProcess[str]:
        """Run kubectl with the configured global flags. Raises ProvisionerError."""
        argv = [self._config.binary, *self._global_args(), *args]
        logger.debug("Running %s", " ".join(argv))
        try:
            return subprocess.run(
                argv,
                input=stdin,
                capture_output=True,
                text=True,
                check=True,
                timeout=self._config.timeout_seconds,
            )
        except OSError as exc:
            raise ProvisionerError(f"provision request failed ({exc})") from exc
        except subprocess.TimeoutExpired as exc:
            raise ProvisionerError(
                f"provision request failed (kubectl timed out after {exc.timeout}s)"
            ) from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or f"kubectl exited with status {exc.returncode}"
            raise ProvisionerError(f"provision request failed ({detail})") from exc
