"""Labels and the stack of enclosing while loops for SPL code generation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class LabelError(Exception):
    """Raised on a redeclared label or a misplaced loop jump."""


@dataclass(frozen=True)
class Label:
    name: str


class LabelManager:
    """Declared labels, generated label names and the while-loop stack."""

    def __init__(self):
        self._declared: dict[str, Label] = {}
        self._counter = 1
        self._whiles: list[tuple[Label, Label]] = []

    def create(self) -> Label:
        """A fresh label with a generated name; it is not declared."""
        label = Label(f"_L{self._counter}")
        self._counter += 1
        return label

    def add(self, name) -> Label:
        if name in self._declared:
            raise LabelError(f"Label '{name}' redeclared.")
        label = Label(name)
        self._declared[name] = label
        return label

    def get(self, name) -> Optional[Label]:
        return self._declared.get(name)

    def push_while(self, start, end):
        self._whiles.append((start, end))

    def pop_while(self):
        self._innermost()
        self._whiles.pop()

    def while_end(self) -> Label:
        return self._innermost()[1]

    def while_start(self) -> Label:
        return self._innermost()[0]

    def _innermost(self) -> tuple[Label, Label]:
        if not self._whiles:
            raise LabelError("not inside a while loop")
        return self._whiles[-1]