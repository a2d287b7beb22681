"""Header carrier access: case-insensitive get, replace-on-set."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any, List, Optional, Protocol, Union

HeaderValue = Union[str, bytes]

_OWS = " \t"


class HeaderGetter(Protocol):
    def get(self, name: str) -> Any:
        ...


class HeaderSetter(Protocol):
    def __setitem__(self, name: str, value: str) -> None:
        ...


def get_header_values(headers: HeaderGetter, name: str) -> Optional[List[str]]:
    """
    Look up every value of a header by case-insensitive name.

    Mappings are scanned item by item, so keys differing only in case and
    the repeated items of a multi-dict all count. Any other carrier is
    trusted to do case-insensitive lookup in its own ``get``. A value may be
    a string, bytes, or a list of those when the header was sent more than
    once. Surrounding spaces and tabs are trimmed. Returns None when absent.
    """
    if isinstance(headers, Mapping):
        found = []
        target = name.lower()
        for key, value in headers.items():
            if isinstance(key, bytes):
                key = key.decode("latin-1")
            elif not isinstance(key, str):
                continue
            if key.lower() == target and value is not None:
                found.extend(_as_list(value))
        if not found:
            return None
        raw = found
    else:
        raw = headers.get(name)
        if raw is None:
            return None
        raw = _as_list(raw)

    values = []
    for item in raw:
        if isinstance(item, bytes):
            item = item.decode("latin-1")
        values.append(item.strip(_OWS))
    return values


def _as_list(value: Any) -> List[HeaderValue]:
    if isinstance(value, (str, bytes)):
        return [value]
    return list(value)


def set_header(headers: HeaderSetter, name: str, value: str) -> None:
    """Insert or replace a header, dropping keys that differ only in case."""
    remove_header(headers, name)
    headers[name] = value


def remove_header(headers: HeaderSetter, name: str) -> None:
    if not isinstance(headers, MutableMapping):
        return
    target = name.lower()
    for key in [k for k in headers.keys() if isinstance(k, str) and k.lower() == target]:
        del headers[key]
