"""
Service API — Header Forwarding
================================

What:  Decides which inbound request headers are forwarded to downstream calls.
How:   HeaderSelector is built once from configuration with the platform
       headers (request id, user id, user groups, client type, backoffice
       flag, user properties) plus any extra names. select() copies the
       matching inbound headers, keyed by the configured spelling.
Who:   Created in create_app(); used by the /hello/with-call route.

Properties:
    - Lookup is case-insensitive; the output uses the configured casing.
    - Absent headers are omitted, never an error.
    - Headers outside the forwarding set are dropped.
    - Multi-valued inbound headers forward their first value only.
    - Output order is the forwarding-set order (base headers, then extras).
"""

import re
from typing import Dict, Iterable, Mapping, Optional, Tuple, Union

DEFAULT_PLATFORM_HEADERS: Tuple[str, ...] = (
    "x-request-id",
    "miauserid",
    "miausergroups",
    "client-type",
    "isbackoffice",
    "miauserproperties",
)

_SEPARATORS = re.compile(r"[,;\s]+")


def parse_header_names(names: Union[str, Iterable[str], None]) -> Tuple[str, ...]:
    """
    Normalize a delimited string or an iterable of header names.

    >>> parse_header_names("x-tenant, x-trace  x-foo")
    ('x-tenant', 'x-trace', 'x-foo')
    >>> parse_header_names("")
    ()
    """
    if names is None:
        return ()
    if isinstance(names, str):
        candidates = _SEPARATORS.split(names)
    else:
        candidates = [part for name in names for part in _SEPARATORS.split(name or "")]
    return tuple(name.strip() for name in candidates if name and name.strip())


class HeaderSelector:
    """
    Immutable forwarding set with a pure select() operation.

    Safe to share between concurrent requests: nothing is mutated after
    __init__.
    """

    __slots__ = ("_names",)

    def __init__(
        self,
        additional_headers: Union[str, Iterable[str], None] = "",
        base_headers: Optional[Iterable[str]] = None,
    ):
        base = parse_header_names(DEFAULT_PLATFORM_HEADERS if base_headers is None else base_headers)

        names = []
        seen = set()
        for name in base + parse_header_names(additional_headers):
            key = name.lower()
            if key in seen:
                continue
            seen.add(key)
            names.append(name)
        self._names: Tuple[str, ...] = tuple(names)

    @property
    def header_names(self) -> Tuple[str, ...]:
        return self._names

    def select(self, request_headers: Mapping[str, str]) -> Dict[str, str]:
        """
        Return the subset of request_headers that must be forwarded.

        Args:
            request_headers: Any mapping of header name to value, e.g. a plain
                dict or Starlette's case-insensitive Headers.

        Returns:
            {configured_name: value} for each forwarding-set header present.
        """
        if not request_headers:
            return {}

        # First occurrence wins when the same name appears with different casing
        inbound: Dict[str, str] = {}
        for name, value in request_headers.items():
            if not isinstance(name, str) or value is None:
                continue
            inbound.setdefault(name.lower(), str(value))

        return {
            name: inbound[name.lower()]
            for name in self._names
            if name.lower() in inbound
        }

    def __repr__(self) -> str:
        return f"HeaderSelector({', '.join(self._names)})"
