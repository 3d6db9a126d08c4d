"""Symbolic constants and register aliases visible while compiling SPL."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .nodes import NodeType

CONSTANT_NAME_MAX_LEN = 30
DEFAULT_CONSTANTS_FILE = "splconstants.cfg"


class SplError(Exception):
    """Raised when an SPL program misuses a name."""


@dataclass
class Constant:
    name: str
    value: int


@dataclass
class Alias:
    name: str
    reg: int
    depth: int


class Scope:
    """Constants and block-scoped register aliases.

    ``depth`` is the nesting depth of the block being compiled and ``line``
    the source line used in error messages; the parser keeps both current.
    """

    def __init__(self):
        self._constants: list[Constant] = []
        self._aliases: list[Alias] = []
        self.depth = 0
        self.line = 0

    @property
    def aliases(self) -> list[Alias]:
        """Aliases from the most recently pushed to the oldest."""
        return list(self._aliases)

    def lookup_constant(self, name) -> Optional[Constant]:
        return next((c for c in self._constants if c.name == name), None)

    def lookup_alias(self, name) -> Optional[Alias]:
        return next((a for a in self._aliases if a.name == name), None)

    def lookup_alias_reg(self, reg) -> Optional[Alias]:
        return next((a for a in self._aliases if a.reg == reg), None)

    def push_alias(self, name, reg):
        """Bind ``name`` to ``reg`` in the current block.

        A register already aliased in this block is renamed instead of
        receiving a second alias.
        """
        if self.lookup_constant(name) is not None:
            raise SplError(
                f"{self.line}: Alias name {name} already used as symbolic contant!!"
            )
        existing = self.lookup_alias(name)
        if existing is not None and existing.depth == self.depth:
            raise SplError(
                f"{self.line}: Alias name {name} already used as in the current block!!"
            )
        same_reg = self.lookup_alias_reg(reg)
        if same_reg is not None and same_reg.depth == self.depth:
            same_reg.name = name
            return same_reg
        alias = Alias(name, reg, self.depth)
        self._aliases.insert(0, alias)
        return alias

    def pop_alias(self):
        """Drop the aliases declared in the current block."""
        while self._aliases and self._aliases[0].depth == self.depth:
            self._aliases.pop(0)

    def insert_constant(self, name, value):
        if self.lookup_constant(name) is not None:
            raise SplError(
                f"{self.line}: Multiple Definitions for constant {name}!!"
            )
        constant = Constant(name, value)
        self._constants.insert(0, constant)
        return constant

    def load_constants(self, path=DEFAULT_CONSTANTS_FILE):
        """Read ``name value`` pairs until the file ends or a pair is malformed."""
        try:
            text = Path(path).read_text()
        except OSError:
            raise SplError(f"Unable to open {path} file!") from None
        tokens = iter(text.split())
        for name in tokens:
            raw = next(tokens, None)
            if raw is None:
                break
            try:
                value = int(raw)
            except ValueError:
                break
            self.insert_constant(name, value)

    def substitute_id(self, node):
        """Turn an identifier node into a number or register node in place."""
        constant = self.lookup_constant(node.name)
        if constant is not None:
            node.nodetype = NodeType.NUM
            node.name = None
            node.value = constant.value
            return node
        alias = self.lookup_alias(node.name)
        if alias is None:
            raise SplError(f"{self.line}: Unknown identifier {node.name} used!!")
        node.nodetype = NodeType.REG
        node.name = None
        node.value = alias.reg
        return node