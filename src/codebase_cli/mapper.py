"""
Decode Codebase XML responses into typed records.

Each record model names its own element (``xml_root``) and the wrapper used
for collections of it (``xml_wrapper``). Leaf elements become text values and
are handed to the models' tolerant field types; child elements with children
become nested mappings.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Type, TypeVar
from xml.etree import ElementTree

from pydantic import ValidationError

from .errors import CodebaseDecodeError
from .models import XMLRecord

R = TypeVar("R", bound=XMLRecord)

_SNIPPET_CHARS = 200


def parse_document(xml_text: str) -> ElementTree.Element:
    text = (xml_text or "").strip()
    if not text:
        raise CodebaseDecodeError(
            field=None, raw_text=xml_text, reason="empty response body"
        )
    try:
        return ElementTree.fromstring(text)
    except ElementTree.ParseError as exc:
        raise CodebaseDecodeError(
            field=None,
            raw_text=text[:_SNIPPET_CHARS],
            reason=f"malformed XML ({exc})",
        ) from exc


def element_to_dict(elem: ElementTree.Element) -> Dict[str, Any]:
    """
    Flatten an element's children into {tag: text-or-mapping}.
    Empty leaves map to "" so the field codec sees them as present-but-empty.
    Attributes (e.g. type="integer", nil="true") are ignored.
    """
    data: Dict[str, Any] = {}
    for child in elem:
        if len(child):
            data[child.tag] = element_to_dict(child)
        else:
            data[child.tag] = child.text if child.text is not None else ""
    return data


def _record_data(elem: ElementTree.Element) -> Dict[str, Any]:
    # <watcher>42</watcher> style items carry their value as text.
    if not len(elem) and elem.text and elem.text.strip():
        return {elem.tag: elem.text}
    return element_to_dict(elem)


def _validate(model: Type[R], data: Dict[str, Any]) -> R:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        err = exc.errors()[0]
        loc = ".".join(str(p) for p in err.get("loc", ()))
        raw = err.get("input")
        raise CodebaseDecodeError(
            field=loc or None,
            raw_text=raw if isinstance(raw, str) else None,
            reason=f"{model.__name__}: {err.get('msg', 'invalid value')}",
        ) from exc


def _expect_root(elem: ElementTree.Element, expected: str) -> None:
    if expected and elem.tag != expected:
        raise CodebaseDecodeError(
            field=None,
            raw_text=None,
            reason=f"expected <{expected}> root element, got <{elem.tag}>",
        )


def decode(model: Type[R], xml_text: str, *, root: Optional[str] = None) -> R:
    """Decode a single-record document whose root is the record element."""
    elem = parse_document(xml_text)
    _expect_root(elem, root if root is not None else model.xml_root)
    return _validate(model, _record_data(elem))


def decode_list(
    model: Type[R],
    xml_text: str,
    *,
    wrapper: Optional[str] = None,
    item: Optional[str] = None,
) -> List[R]:
    """
    Decode a collection document: a wrapper element around zero or more
    repeated record elements. An empty wrapper yields [].
    """
    elem = parse_document(xml_text)
    _expect_root(elem, wrapper if wrapper is not None else model.xml_wrapper)
    tag = item if item is not None else model.xml_root
    return [_validate(model, _record_data(child)) for child in elem.findall(tag)]


__all__ = ["decode", "decode_list", "element_to_dict", "parse_document"]
