"""
Tolerant decoders for leaf values in Codebase XML responses.

The service encodes "no value" three different ways: the element is missing,
the element is present but empty (``<group-id></group-id>``), or it carries
an empty string. All three decode to ``None``. Only present text that cannot
be parsed as the target type is an error.
"""

from __future__ import annotations

import re
from typing import Annotated, Any, Callable, Optional, TypeVar

from pydantic import BeforeValidator

from .errors import CodebaseDecodeError

T = TypeVar("T")

Decoder = Callable[..., Optional[T]]

_BOOL_LITERALS = {"true": True, "1": True, "false": False, "0": False}

# ASCII only; int() and float() would also take "1_000", " 42 " and "\u0663".
_INT_LITERAL = re.compile(r"[+-]?[0-9]+")
_FLOAT_LITERAL = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|[+-]?(?:inf|infinity|nan)",
    re.IGNORECASE,
)


def _parse_int(text: str) -> int:
    if not _INT_LITERAL.fullmatch(text):
        raise ValueError(f"invalid int value: {text}")
    return int(text)


def _parse_float(text: str) -> float:
    if not _FLOAT_LITERAL.fullmatch(text):
        raise ValueError(f"invalid float value: {text}")
    return float(text)


def _parse_bool(text: str) -> bool:
    try:
        return _BOOL_LITERALS[text]
    except KeyError:
        raise ValueError(f"invalid bool value: {text}") from None


def tolerant(parse: Callable[[str], T], kind: str) -> Decoder[T]:
    """
    Build a decoder for one scalar type.

    The returned function takes the raw element text (``None`` when the
    element was absent) and an optional field name used in error messages.
    """

    def decode(text: Optional[str], field: Optional[str] = None) -> Optional[T]:
        if text is None:
            return None
        if not text.strip():
            return None
        try:
            return parse(text)
        except (TypeError, ValueError) as exc:
            raise CodebaseDecodeError(
                field=field,
                raw_text=text,
                reason=f"invalid {kind} value",
            ) from exc

    decode.__name__ = f"decode_{kind}"
    return decode


decode_int: Decoder[int] = tolerant(_parse_int, "int")
decode_float: Decoder[float] = tolerant(_parse_float, "float")
decode_bool: Decoder[bool] = tolerant(_parse_bool, "bool")


def decode_str(text: Optional[str], field: Optional[str] = None) -> Optional[str]:
    # Strings are kept verbatim; only a blank value collapses to None.
    if text is None or not text.strip():
        return None
    return text


# --- pydantic field types --------------------------------------------------- #


def _from_wire(decoder: Decoder[Any]) -> BeforeValidator:
    """
    Run ``decoder`` on wire text; let already-typed Python values through so
    records can also be built directly (e.g. NoteChanges(status_id=2)).
    """

    def validate(value: Any) -> Any:
        if value is None or isinstance(value, str):
            try:
                return decoder(value)
            except CodebaseDecodeError as exc:
                # pydantic only collects ValueError; the mapper turns the
                # resulting ValidationError back into CodebaseDecodeError.
                raise ValueError(exc.reason) from exc
        return value

    return BeforeValidator(validate)


def _blank_to_empty(value: Any) -> Any:
    if value is None:
        return ""
    return value


def _blank_record_to_none(value: Any) -> Any:
    # <changes></changes> arrives as an empty string rather than a mapping.
    if isinstance(value, str) and not value.strip():
        return None
    return value


OptionalInt = Annotated[Optional[int], _from_wire(decode_int)]
OptionalFloat = Annotated[Optional[float], _from_wire(decode_float)]
OptionalBool = Annotated[Optional[bool], _from_wire(decode_bool)]
OptionalStr = Annotated[Optional[str], _from_wire(decode_str)]
RequiredStr = Annotated[str, BeforeValidator(_blank_to_empty)]

blank_record_to_none = BeforeValidator(_blank_record_to_none)


__all__ = [
    "tolerant",
    "decode_int",
    "decode_float",
    "decode_bool",
    "decode_str",
    "OptionalInt",
    "OptionalFloat",
    "OptionalBool",
    "OptionalStr",
    "RequiredStr",
    "blank_record_to_none",
]
