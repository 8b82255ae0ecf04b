"""Input errors raised while resolving a provisioning request.

Two families, both :class:`ValueError` subclasses:

- :class:`UsageError` — the command line is shaped wrong (no instance
  name, mutually exclusive flags both set).
- :class:`ParameterParseError` — a single flag value is malformed. It
  keeps the flag and the offending raw value for structured reporting.

The service layer maps each family to a ``ServiceError`` code.
"""

from __future__ import annotations


class ProvisionInputError(ValueError):
    """Base class for errors found before any provisioning call is made."""

    code = "INVALID_INPUT"


class UsageError(ProvisionInputError):
    """The positional arguments or flag combination are not usable."""

    code = "USAGE_ERROR"


class ParameterFormatError(ValueError):
    """A raw parameter string does not match its expected grammar."""

    def __init__(self, value: str, reason: str) -> None:
        super().__init__(reason)
        self.value = value
        self.reason = reason


class ParameterParseError(ProvisionInputError):
    """A flag value could not be parsed.

    Attributes:
        flag: The flag that carried the value (``--param``, ``--secret``,
            ``--params-json``).
        value: The offending raw value.
        reason: The underlying syntax problem.
    """

    code = "INVALID_PARAMETER"

    def __init__(self, flag: str, value: str, reason: str) -> None:
        super().__init__(f"invalid {flag} value ({reason})")
        self.flag = flag
        self.value = value
        self.reason = reason
