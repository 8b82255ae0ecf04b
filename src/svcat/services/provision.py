"""ProvisionService — validate raw input, then request one instance.

Pipeline: VALIDATE → DISPATCH → RESPOND

INVARIANT: At most one provisioning call per ``provision()`` invocation,
and none when validation fails.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from typing import TYPE_CHECKING

import structlog

from svcat.domain.errors import ParameterParseError, ProvisionInputError
from svcat.domain.request import DEFAULT_NAMESPACE, ProvisionRequest, build_provision_request
from svcat.infrastructure.provisioner import ProvisionerError
from svcat.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from svcat.infrastructure.provisioner import Provisioner

logger = logging.getLogger(__name__)


class ProvisionService:
    """Turns raw ``svcat provision`` input into a single provisioning call."""

    op = "provision"

    def __init__(self, provisioner: Provisioner) -> None:
        self._provisioner = provisioner

    def provision(
        self,
        args: Sequence[str],
        *,
        class_name: str,
        plan_name: str,
        namespace: str = DEFAULT_NAMESPACE,
        raw_params: Sequence[str] = (),
        json_params: str = "",
        raw_secrets: Sequence[str] = (),
    ) -> ServiceResult:
        """Validate the command input and dispatch the request.

        Validation failures come back as ``USAGE_ERROR`` or
        ``INVALID_PARAMETER`` results without touching the provisioner.
        """
        # ── VALIDATE ─────────────────────────────────────────
        try:
            request = build_provision_request(
                args,
                class_name=class_name,
                plan_name=plan_name,
                namespace=namespace,
                raw_params=raw_params,
                json_params=json_params,
                raw_secrets=raw_secrets,
            )
        except ProvisionInputError as exc:
            logger.debug("Rejected provision input: %s", exc)
            return ServiceResult(ok=False, op=self.op, error=_input_error(exc))

        # ── DISPATCH / RESPOND ───────────────────────────────
        result = self.dispatch(request)
        warnings = _duplicate_secret_warnings(raw_secrets, request.secrets)
        if warnings and result.ok:
            return result.model_copy(update={"warnings": [*result.warnings, *warnings]})
        return result

    def dispatch(self, request: ProvisionRequest) -> ServiceResult:
        """Issue exactly one provisioning call for *request*.

        The provisioner receives copies of the parameters and secrets, so
        the request stays unchanged whatever the collaborator does.

        A :class:`ProvisionerError` becomes a ``PROVISION_FAILED`` result
        with the provisioner's message unchanged. Anything else propagates.
        """
        with structlog.contextvars.bound_contextvars(
            namespace=request.namespace, instance=request.instance_name
        ):
            logger.info(
                "Provisioning %s from class %s, plan %s",
                request.instance_name,
                request.class_name,
                request.plan_name,
            )
            try:
                instance = self._provisioner.provision(
                    request.namespace,
                    request.instance_name,
                    request.class_name,
                    request.plan_name,
                    request.parameters.model_copy(deep=True),
                    dict(request.secrets),
                )
            except ProvisionerError as exc:
                logger.debug("Provision request failed: %s", exc)
                return ServiceResult(
                    ok=False,
                    op=self.op,
                    error=ServiceError(
                        code="PROVISION_FAILED",
                        message=str(exc),
                        detail={
                            "namespace": request.namespace,
                            "name": request.instance_name,
                        },
                    ),
                )
            logger.debug("Provisioned %s (uid=%s)", instance.name, instance.uid or "-")

        return ServiceResult(ok=True, op=self.op, data=instance.to_data())


def _input_error(exc: ProvisionInputError) -> ServiceError:
    detail: dict[str, str] = {}
    if isinstance(exc, ParameterParseError):
        detail = {"flag": exc.flag, "value": exc.value}
    return ServiceError(code=exc.code, message=str(exc), detail=detail)


def _duplicate_secret_warnings(raw_secrets: Sequence[str], resolved: dict[str, str]) -> list[str]:
    """Report secrets named more than once; the last key given is the one used."""
    counts = Counter(raw.strip().partition("[")[0].strip() for raw in raw_secrets)
    return [
        f"Secret {name!r} given {count} times, using key {resolved[name]!r}"
        for name, count in counts.items()
        if count > 1 and name in resolved
    ]
