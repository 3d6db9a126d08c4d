"""Syntax tree nodes of the SPL compiler."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class NodeType(IntEnum):
    IF = 0
    LOAD = 1
    STORE = 2
    LOADI = 3
    READ = 4
    READI = 5
    PRINT = 6
    REG = 7
    NUM = 8
    STRING = 9
    IDENT = 10
    NONTERM = 11
    STRCMP = 12
    STRCOPY = 13
    WHILE = 14
    EQ = 15
    GT = 16
    LT = 17
    LE = 18
    GE = 19
    NE = 20
    AND = 21
    OR = 22
    NOT = 23
    BREAK = 24
    CONTINUE = 25
    ADDR_EXPR = 26
    HALT = 27
    BREAKPOINT = 28
    RETURN = 29
    IRETURN = 30
    INLINE = 31
    ENCRYPT = 32
    STMTLIST = 33
    ADD = 34
    SUB = 35
    MUL = 36
    DIV = 37
    MOD = 38
    ASSIGN = 39
    BACKUP = 40
    RESTORE = 41
    GOTO = 42
    CALL = 43
    PORT = 44
    LABEL_DEF = 45
    MULTIPUSH = 46
    MULTIPOP = 47
    START = 48
    RESET = 49
    TSL = 50


@dataclass(eq=False)
class Node:
    nodetype: int
    name: Optional[str] = None
    value: int = 0
    ptr1: Optional["Node"] = None
    ptr2: Optional["Node"] = None
    ptr3: Optional["Node"] = None


def term_node(nodetype, name, value) -> Node:
    """A leaf carrying a name or a value."""
    return Node(nodetype, name, value)


def nonterm_node(nodetype, a, b) -> Node:
    """An inner node with two subtrees."""
    return Node(nodetype, None, 0, a, b)


def create_tree(a, b, c, d) -> Node:
    """Attach three subtrees to ``a`` and return it."""
    a.ptr1, a.ptr2, a.ptr3 = b, c, d
    return a