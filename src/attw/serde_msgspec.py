"""Shared msgspec policy and helpers."""

from __future__ import annotations

from pathlib import Path

import msgspec


class StructBaseStrict(
    msgspec.Struct,
    frozen=True,
    kw_only=True,
    omit_defaults=True,
    repr_omit_defaults=True,
    forbid_unknown_fields=True,
):
    """Base struct for strict contracts."""


class StructBaseCompat(
    msgspec.Struct,
    frozen=True,
    kw_only=True,
    omit_defaults=False,
    repr_omit_defaults=True,
    forbid_unknown_fields=False,
    rename="camel",
):
    """Base struct for engine payloads using camelCase wire names."""


def _json_enc_hook(obj: object) -> object:
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, (frozenset, set)):
        return sorted(obj, key=str)
    raise TypeError


_SORTED_ENCODER = msgspec.json.Encoder(enc_hook=_json_enc_hook, order="deterministic")
_ENGINE_ORDER_ENCODER = msgspec.json.Encoder(enc_hook=_json_enc_hook)


def encode_json(obj: object, *, indent: int | None = None, sort_keys: bool = True) -> str:
    """Encode an object into JSON text.

    Parameters
    ----------
    obj
        Struct, mapping or builtin payload to encode.
    indent
        Optional indentation; compact output when omitted.
    sort_keys
        Sort mapping keys. When false, mappings keep insertion order, which
        for analysis results is the engine's entry point order.

    Returns
    -------
    str
        JSON document.
    """
    encoder = _SORTED_ENCODER if sort_keys else _ENGINE_ORDER_ENCODER
    payload = encoder.encode(obj)
    if indent is not None:
        payload = msgspec.json.format(payload, indent=indent)
    return payload.decode("utf-8")


def validation_error_payload(exc: msgspec.ValidationError) -> str:
    """Return a compact human-readable message for a validation error.

    Returns
    -------
    str
        Message describing the failing field.
    """
    return str(exc).replace("`$.", "`")


__all__ = [
    "StructBaseCompat",
    "StructBaseStrict",
    "encode_json",
    "validation_error_payload",
]
