"""ProvisionRequest and the validator that builds it from raw CLI input.

The parameter payload is a tagged union: a flat ``NAME=VALUE`` mapping
or a structured JSON value, never both.

INVARIANT: A ProvisionRequest is immutable once built. It is constructed
once per command invocation and discarded after dispatch.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

from svcat.domain.errors import ParameterFormatError, ParameterParseError, UsageError
from svcat.domain.parameters import (
    parse_key_maps,
    parse_variable_assignments,
    parse_variable_json,
)

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "default"


class FlatParameters(BaseModel):
    """Parameters given as repeated ``--param NAME=VALUE`` flags."""

    model_config = {"frozen": True}

    kind: Literal["flat"] = "flat"
    values: dict[str, str] = Field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.values

    def to_wire(self) -> dict[str, str]:
        return dict(self.values)


class StructuredParameters(BaseModel):
    """Parameters given as a single ``--params-json`` document."""

    model_config = {"frozen": True}

    kind: Literal["structured"] = "structured"
    value: Any = None

    def is_empty(self) -> bool:
        return False

    def to_wire(self) -> Any:
        return self.value


ParameterPayload = Annotated[FlatParameters | StructuredParameters, Field(discriminator="kind")]


class ProvisionRequest(BaseModel):
    """Fully resolved input for a single provisioning call."""

    model_config = {"frozen": True}

    namespace: str = DEFAULT_NAMESPACE
    instance_name: str
    class_name: str
    plan_name: str
    parameters: ParameterPayload = Field(default_factory=FlatParameters)
    secrets: dict[str, str] = Field(default_factory=dict)


def resolve_parameters(raw_params: Sequence[str], json_params: str) -> ParameterPayload:
    """Pick and parse the single parameter source.

    The mutual-exclusion check runs before either source is parsed.
    """
    if json_params and raw_params:
        raise UsageError("--params-json cannot be used with --param")

    if json_params:
        try:
            return StructuredParameters(value=parse_variable_json(json_params))
        except ParameterFormatError as exc:
            raise ParameterParseError("--params-json", exc.value, exc.reason) from exc

    try:
        return FlatParameters(values=parse_variable_assignments(raw_params))
    except ParameterFormatError as exc:
        raise ParameterParseError("--param", exc.value, exc.reason) from exc


def resolve_secrets(raw_secrets: Sequence[str]) -> dict[str, str]:
    """Parse ``SECRET[KEY]`` references into a secret-to-key mapping."""
    try:
        return parse_key_maps(raw_secrets)
    except ParameterFormatError as exc:
        raise ParameterParseError("--secret", exc.value, exc.reason) from exc


def build_provision_request(
    args: Sequence[str],
    *,
    class_name: str,
    plan_name: str,
    namespace: str = DEFAULT_NAMESPACE,
    raw_params: Sequence[str] = (),
    json_params: str = "",
    raw_secrets: Sequence[str] = (),
) -> ProvisionRequest:
    """Validate raw command input and build a ProvisionRequest.

    Args:
        args: Positional arguments; exactly one, the instance name.
        class_name: Service class to provision from.
        plan_name: Plan of that class.
        namespace: Namespace for the new instance.
        raw_params: ``NAME=VALUE`` strings from ``--param``.
        json_params: JSON text from ``--params-json``.
        raw_secrets: ``SECRET[KEY]`` strings from ``--secret``.

    Raises:
        UsageError: No instance name, too many positional arguments, or
            both parameter sources given.
        ParameterParseError: The first malformed flag value.
    """
    if not args:
        raise UsageError("an instance name is required")
    if len(args) > 1:
        raise UsageError(f"only one instance name may be given, got {len(args)}")
    instance_name = args[0]

    parameters = resolve_parameters(raw_params, json_params)
    secrets = resolve_secrets(raw_secrets)

    logger.debug(
        "Resolved provision request for %s/%s (%s parameters, %d secret references)",
        namespace,
        instance_name,
        parameters.kind,
        len(secrets),
    )
    return ProvisionRequest(
        namespace=namespace,
        instance_name=instance_name,
        class_name=class_name,
        plan_name=plan_name,
        parameters=parameters,
        secrets=secrets,
    )
