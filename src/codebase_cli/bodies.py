"""
Request bodies for create/update calls.

A body is an ordered list of (element, value) pairs. Pairs whose value is
None are dropped, so an omitted argument never shows up as an empty element.
There is no way to send an explicitly empty element.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Union
from xml.sax.saxutils import escape

Scalar = Union[str, int, float, bool]


def _cdata(text: str) -> str:
    # "]]>" cannot appear inside a CDATA section; split it across two.
    return "<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def _render_scalar(value: Scalar) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return escape(str(value))


@dataclass
class XMLBody:
    """Builder for ``<root><a>..</a><b>..</b></root>`` request bodies."""

    root: str
    _parts: List[str] = field(default_factory=list)

    def add(self, name: str, value: Optional[Scalar]) -> "XMLBody":
        if value is not None:
            self._parts.append(f"<{name}>{_render_scalar(value)}</{name}>")
        return self

    def add_text(self, name: str, value: Optional[str]) -> "XMLBody":
        """Free text (descriptions, note content), wrapped in CDATA."""
        if value is not None:
            self._parts.append(f"<{name}>{_cdata(value)}</{name}>")
        return self

    def add_flag(self, name: str, enabled: bool) -> "XMLBody":
        """Emit ``<name>1</name>`` only when the flag is set."""
        if enabled:
            self._parts.append(f"<{name}>1</{name}>")
        return self

    def add_all(self, pairs: Iterable[Tuple[str, Optional[Scalar]]]) -> "XMLBody":
        for name, value in pairs:
            self.add(name, value)
        return self

    @property
    def is_empty(self) -> bool:
        return not self._parts

    def add_body(self, child: Optional["XMLBody"]) -> "XMLBody":
        """Nest another body; a missing or empty child is left out."""
        if child is not None and not child.is_empty:
            self._parts.append(child.render())
        return self

    def add_each(self, name: str, values: Iterable[Scalar]) -> "XMLBody":
        """Repeated leaf elements: <watcher>1</watcher><watcher>2</watcher>."""
        for value in values:
            self.add(name, value)
        return self

    def render(self) -> str:
        return f"<{self.root}>{''.join(self._parts)}</{self.root}>"

    def __str__(self) -> str:
        return self.render()


__all__ = ["XMLBody"]
