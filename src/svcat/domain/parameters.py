"""Parsers for the raw parameter flags of ``svcat provision``.

Three input grammars:

- ``NAME=VALUE`` assignments (``--param``), split on the first ``=``.
- A JSON document (``--params-json``), any JSON value.
- ``SECRET[KEY]`` lookups (``--secret``), naming a key inside a secret.

Each parser fails on the first malformed entry with
:class:`~svcat.domain.errors.ParameterFormatError` naming that entry.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable
from typing import Any

from svcat.domain.errors import ParameterFormatError

logger = logging.getLogger(__name__)

KEY_MAP_PATTERN: re.Pattern[str] = re.compile(r"^([^\[\]]*)\[([^\[\]]*)\]$")


def parse_variable_assignments(params: Iterable[str]) -> dict[str, str]:
    """Convert ``NAME=VALUE`` strings into an ordered mapping.

    Names and values are stripped of surrounding whitespace. Values may
    themselves contain ``=``. A repeated name is rejected rather than
    overwritten.

    Examples:
        >>> parse_variable_assignments(["a=b", "c=abc1232==="])
        {'a': 'b', 'c': 'abc1232==='}
        >>> parse_variable_assignments([])
        {}
    """
    variables: dict[str, str] = {}
    for param in params:
        name, sep, value = param.partition("=")
        if not sep:
            raise ParameterFormatError(
                param, f"invalid parameter ({param}), must be in name=value format"
            )
        name = name.strip()
        if not name:
            raise ParameterFormatError(
                param, f"invalid parameter ({param}), variable name is required"
            )
        if name in variables:
            raise ParameterFormatError(
                param, f"invalid parameter ({param}), {name} is specified more than once"
            )
        variables[name] = value.strip()
    return variables


def parse_variable_json(params: str) -> Any:
    """Parse a JSON document into its Python value.

    Any JSON value is accepted (object, array, or scalar).

    Examples:
        >>> parse_variable_json('{"a": 1}')
        {'a': 1}
    """
    try:
        return json.loads(params)
    except json.JSONDecodeError as exc:
        raise ParameterFormatError(params, f"invalid JSON: {exc}") from exc


def parse_key_maps(params: Iterable[str]) -> dict[str, str]:
    """Convert ``MAP[KEY]`` strings into a mapping of map name to key.

    Nothing may follow the closing bracket. When the same map name
    appears twice the later key wins.

    Examples:
        >>> parse_key_maps(["a[b]", "mymap[My Key]"])
        {'a': 'b', 'mymap': 'My Key'}
    """
    keymap: dict[str, str] = {}
    for param in params:
        match = KEY_MAP_PATTERN.match(param.strip())
        if match is None:
            raise ParameterFormatError(
                param, f"invalid parameter ({param}), must be in MAP[KEY] format"
            )
        map_name = match.group(1).strip()
        if not map_name:
            raise ParameterFormatError(param, f"invalid parameter ({param}), map is required")
        key = match.group(2).strip()
        if not key:
            raise ParameterFormatError(param, f"invalid parameter ({param}), key is required")
        if map_name in keymap:
            logger.debug("Secret %s given more than once, using key %s", map_name, key)
        keymap[map_name] = key
    return keymap
