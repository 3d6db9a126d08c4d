"""Code emission for SPL expressions.

Intermediate values live on a small stack of compiler registers starting
at ``R16``; ``regcount`` is the number of them in use.
"""

from __future__ import annotations

from .nodes import NodeType
from .registers import C_REG_BASE, register_name
from .scope import SplError

MAX_TEMPORARIES = 5

# Operators without an immediate form: (opcode, opcode with operands swapped).
_SYMMETRIC = {
    NodeType.LT: ("LT", "GT"),
    NodeType.GT: ("GT", "LT"),
    NodeType.EQ: ("EQ", "EQ"),
    NodeType.LE: ("LE", "GE"),
    NodeType.GE: ("GE", "LE"),
    NodeType.NE: ("NE", "NE"),
    NodeType.AND: ("MUL", "MUL"),
    NodeType.OR: ("ADD", "ADD"),
}

# Arithmetic operators accept an immediate right operand.
_ARITHMETIC = {
    NodeType.ADD: "ADD",
    NodeType.SUB: "SUB",
    NodeType.MUL: "MUL",
    NodeType.DIV: "DIV",
    NodeType.MOD: "MOD",
}

_COMMUTATIVE = {NodeType.ADD, NodeType.MUL}


class ExpressionCompiler:
    """Compiles SPL expression trees to assembly lines."""

    def __init__(self):
        self.lines: list[str] = []
        self.regcount = 0
        self.out_linecount = 0
        self._handlers = {
            NodeType.NOT: self._compile_not,
            NodeType.ADDR_EXPR: self._compile_addr,
            NodeType.NUM: self._compile_num,
            NodeType.STRING: self._compile_string,
            NodeType.REG: self._compile_reg,
            NodeType.TSL: self._compile_tsl,
        }
        for kind in _SYMMETRIC:
            self._handlers[kind] = self._compile_symmetric
        for kind in _ARITHMETIC:
            self._handlers[kind] = self._compile_arithmetic

    def emit(self, text):
        """Append instructions; each line of ``text`` counts as one."""
        new_lines = text.split("\n")
        self.lines.extend(new_lines)
        self.out_linecount += len(new_lines)

    def _emit_label(self, name):
        self.lines.append(f"{name}:")

    def text(self) -> str:
        return "".join(line + "\n" for line in self.lines)

    def compile_expression(self, node):
        """Emit code leaving the value of ``node`` in the top temporary."""
        handler = self._handlers.get(node.nodetype)
        if handler is None:
            raise SplError(f"Unknown Command {node.nodetype} {node.name}")
        handler(node)

    # Temporary register stack.

    def _next(self) -> str:
        return f"R{C_REG_BASE + self.regcount}"

    def _top(self, depth=1) -> str:
        return f"R{C_REG_BASE + self.regcount - depth}"

    def _grow(self):
        self.regcount += 1
        if self.regcount == MAX_TEMPORARIES:
            raise SplError("Register Overflow. Please reduce size of your expression.")

    def _shrink(self):
        self.regcount -= 1

    # Handlers.

    def _compile_symmetric(self, node):
        opcode, swapped = _SYMMETRIC[node.nodetype]
        left, right = node.ptr1, node.ptr2
        if left.nodetype == NodeType.REG:
            reg1 = register_name(left.value)
            if right.nodetype == NodeType.REG:
                reg2 = register_name(right.value)
                target = self._next()
                self.emit(f"MOV {target}, {reg1}\n{opcode} {target}, {reg2}")
                self._grow()
            else:
                self.compile_expression(right)
                self.emit(f"{swapped} {self._top()}, {reg1}")
            return
        self.compile_expression(left)
        if right.nodetype == NodeType.REG:
            self.emit(f"{opcode} {self._top()}, {register_name(right.value)}")
        else:
            self.compile_expression(right)
            self.emit(f"{opcode} {self._top(2)}, {self._top()}")
            self._shrink()

    def _compile_arithmetic(self, node):
        opcode = _ARITHMETIC[node.nodetype]
        left, right = node.ptr1, node.ptr2
        if left.nodetype == NodeType.REG:
            reg1 = register_name(left.value)
            if right.nodetype in (NodeType.REG, NodeType.NUM):
                operand = (
                    register_name(right.value)
                    if right.nodetype == NodeType.REG
                    else str(right.value)
                )
                target = self._next()
                self.emit(f"MOV {target}, {reg1}\n{opcode} {target}, {operand}")
                self._grow()
            elif node.nodetype in _COMMUTATIVE:
                self.compile_expression(right)
                self.emit(f"{opcode} {self._top()}, {reg1}")
            else:
                self.emit(f"MOV {self._next()}, {reg1}")
                self._grow()
                self.compile_expression(right)
                self.emit(f"{opcode} {self._top(2)}, {self._top()}")
                self._shrink()
            return
        self.compile_expression(left)
        if right.nodetype == NodeType.REG:
            self.emit(f"{opcode} {self._top()}, {register_name(right.value)}")
        elif right.nodetype == NodeType.NUM:
            self.emit(f"{opcode} {self._top()}, {right.value}")
        else:
            self.compile_expression(right)
            self.emit(f"{opcode} {self._top(2)}, {self._top()}")
            self._shrink()

    def _compile_not(self, node):
        self.emit(f"MOV {self._next()}, 1")
        self._grow()
        operand = node.ptr1
        if operand.nodetype == NodeType.REG:
            self.emit(f"SUB {self._top()}, {register_name(operand.value)}")
        else:
            self.compile_expression(operand)
            self.emit(f"SUB {self._top(2)}, {self._top()}")
            self._shrink()

    def _compile_addr(self, node):
        self.compile_expression(node.ptr1)
        top = self._top()
        self.emit(f"MOV {top}, [{top}]")

    def _compile_num(self, node):
        self.emit(f"MOV {self._next()}, {node.value}")
        self._grow()

    def _compile_string(self, node):
        self.emit(f"MOV {self._next()}, {node.name}")
        self._grow()

    def _compile_reg(self, node):
        self.emit(f"MOV {self._next()}, {register_name(node.value)}")
        self._grow()

    def _compile_tsl(self, node):
        operand = node.ptr1
        if operand.nodetype == NodeType.NUM:
            self.emit(f"TSL {self._next()}, [{operand.value}]")
        elif operand.nodetype == NodeType.REG:
            self.emit(f"TSL {self._next()}, [{register_name(operand.value)}]")
        else:
            self.compile_expression(operand)
            self.emit(f"SUB {self._next()}, [{self._top()}]")
        self._grow()