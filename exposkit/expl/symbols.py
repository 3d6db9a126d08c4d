"""Global, local, parameter, type and field tables of the ExpL compiler."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


class CompileError(Exception):
    """Raised when the source program breaks a rule of the language."""


@dataclass(eq=False)
class Field:
    """A field of a user-defined type."""

    name: str
    type: Any = None
    field_index: int = 0


@dataclass(eq=False)
class TypeEntry:
    """An entry of the type table."""

    name: str
    size: int = 0
    fields: list = field(default_factory=list)


@dataclass(eq=False)
class Param:
    """A formal parameter of a function."""

    name: str
    type: Any = None
    amp: int = 0


@dataclass(eq=False)
class GlobalSymbol:
    """A global variable, array or function."""

    name: str
    type: Any
    size: int
    binding: int
    paramlist: Any = None
    flabel: int = 0


@dataclass(eq=False)
class LocalSymbol:
    """A local variable of a function."""

    name: str
    type: Any
    binding: int


class SymbolTable:
    """All symbol tables of one compilation, with their address counters."""

    def __init__(self, total_count: int = 4096):
        self.globals: list[GlobalSymbol] = []
        self.locals: list[LocalSymbol] = []
        self.params: list[Param] = []
        self.types: list[TypeEntry] = []
        self.pending_fields: list[Field] = []
        self.total_count = total_count
        self.fbind = 0

    def glookup(self, name) -> Optional[GlobalSymbol]:
        return next((s for s in self.globals if s.name == name), None)

    def ginstall(self, name, type, size, paramlist):
        """Install a global; a size of -1 marks a function."""
        if self.glookup(name) is not None:
            raise CompileError(f'Variable re-initialized "{name}"')
        if size == -1:
            binding = self.fbind
            self.fbind += 1
        else:
            binding = self.total_count
            self.total_count += size
        symbol = GlobalSymbol(name, type, size, binding, paramlist)
        self.globals.append(symbol)
        return symbol

    def llookup(self, name) -> Optional[LocalSymbol]:
        return next((s for s in self.locals if s.name == name), None)

    def linstall(self, name, type):
        symbol = LocalSymbol(name, type, self.total_count)
        self.total_count += 1
        self.locals.append(symbol)
        return symbol

    def plookup(self, name) -> Optional[Param]:
        return next((p for p in self.params if p.name == name), None)

    def pinstall(self, name, type):
        param = Param(name, type)
        self.params.append(param)
        return param

    def tlookup(self, name) -> Optional[TypeEntry]:
        return next((t for t in self.types if t.name == name), None)

    def tinstall(self, name, size, fields):
        """Install a type; fields typed as ``dummy`` refer to the type itself.

        The size of the entry is the number of its fields.
        """
        entry = TypeEntry(name)
        self.types.append(entry)
        fields = list(fields) if fields is not None else []
        dummy = self.tlookup("dummy")
        for index, fld in enumerate(fields):
            if fld.type is dummy:
                fld.type = self.tlookup(name)
            fld.field_index = index
        entry.fields = fields
        entry.size = len(fields)
        self.pending_fields = []
        return entry

    def flookup(self, name, fields) -> Optional[Field]:
        return next((f for f in fields or () if f.name == name), None)

    def finstall(self, type, name):
        """Add a field to the list being collected for the next type."""
        fld = Field(name, type)
        self.pending_fields.append(fld)
        return fld

    def format_globals(self) -> str:
        return "".join(
            f"{s.name}----{s.type.name}-----{s.binding}\n" for s in self.globals
        )