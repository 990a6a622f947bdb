"""Placeholder codec.

A protected span is carried through the HTML parser as a comment of the form
``<!-- ___<namespace>_<index>___ <base64> -->``.  Base64 output only uses
``A-Za-z0-9+/=`` so neither the parser nor the serializer has a reason to
touch it.  Some serializers entity-escape the comment delimiters when the
comment lands in an attribute value; ``escaped=True`` selects the delimiters
in that form.
"""

from __future__ import annotations

import base64
import binascii
import html

from htmlstrip.utils.errors import DecodeError

PREFIX_TEMPLATE = "<!-- ___{namespace}_{index}___ "
SUFFIX = " -->"

__all__ = [
    "PREFIX_TEMPLATE",
    "SUFFIX",
    "placeholder_marker",
    "placeholder_prefix",
    "placeholder_suffix",
    "encode",
    "decode",
]


def placeholder_marker(namespace: str, pair_index: int) -> str:
    """Return the bare ``___<namespace>_<index>___`` identifier."""

    return f"___{namespace}_{pair_index:d}___"


def placeholder_prefix(namespace: str, pair_index: int, *, escaped: bool = False) -> str:
    prefix = PREFIX_TEMPLATE.format(namespace=namespace, index=int(pair_index))
    return html.escape(prefix) if escaped else prefix


def placeholder_suffix(*, escaped: bool = False) -> str:
    return html.escape(SUFFIX) if escaped else SUFFIX


def encode(namespace: str, pair_index: int, payload: bytes) -> str:
    """Return the placeholder comment carrying ``payload``."""

    body = base64.b64encode(payload).decode("ascii")
    return f"{placeholder_prefix(namespace, pair_index)}{body}{SUFFIX}"


def decode(token: str, namespace: str, pair_index: int, *, escaped: bool = False) -> bytes:
    """Return the payload bytes hidden in ``token``.

    Raises
    ------
    DecodeError
        If ``token`` lacks the expected delimiters or its payload is not
        strict base64.
    """

    prefix = placeholder_prefix(namespace, pair_index, escaped=escaped)
    suffix = placeholder_suffix(escaped=escaped)
    too_short = len(token) < len(prefix) + len(suffix)
    if too_short or not (token.startswith(prefix) and token.endswith(suffix)):
        raise DecodeError(f"could not decode hidden tag {token!r}: unexpected delimiters")
    body = token[len(prefix) : len(token) - len(suffix)]
    try:
        return base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"could not decode hidden tag {token!r}: {exc}") from exc
