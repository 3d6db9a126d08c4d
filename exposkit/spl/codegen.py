"""Statement-level code generation for SPL programs."""

from __future__ import annotations

from .expressions import ExpressionCompiler
from .labels import LabelManager
from .nodes import NodeType
from .registers import register_name
from .scope import SplError

_SIMPLE = {
    NodeType.BACKUP: "BACKUP",
    NodeType.RESTORE: "RESTORE",
    NodeType.RETURN: "RET",
    NodeType.IRETURN: "IRET",
    NodeType.HALT: "HALT",
    NodeType.BREAKPOINT: "BRKP",
    NodeType.READ: "IN",
    NodeType.START: "START",
    NodeType.RESET: "RESET",
}

_TRANSFER = {
    NodeType.LOAD: "LOAD",
    NodeType.LOADI: "LOADI",
    NodeType.STORE: "STORE",
}


class SplCodeGenerator(ExpressionCompiler):
    """Compiles a whole SPL syntax tree, statements and expressions alike.

    ``out_linecount`` counts emitted instructions; label definitions and
    ``CALL``/``JMP`` to named or numbered targets are not counted.
    """

    def __init__(self, labels=None):
        super().__init__()
        self.labels = labels if labels is not None else LabelManager()
        self._statements = {
            NodeType.STMTLIST: self._gen_stmtlist,
            NodeType.ASSIGN: self._gen_assign,
            NodeType.IF: self._gen_if,
            NodeType.WHILE: self._gen_while,
            NodeType.BREAK: self._gen_break,
            NodeType.CONTINUE: self._gen_continue,
            NodeType.MULTIPUSH: self._gen_multipush,
            NodeType.MULTIPOP: self._gen_multipop,
            NodeType.READI: self._gen_readi,
            NodeType.PRINT: self._gen_print,
            NodeType.INLINE: self._gen_inline,
            NodeType.ENCRYPT: self._gen_encrypt,
            NodeType.LABEL_DEF: self._gen_label_def,
            NodeType.CALL: self._gen_call,
            NodeType.GOTO: self._gen_goto,
        }
        for kind in _SIMPLE:
            self._statements[kind] = self._gen_simple
        for kind in _TRANSFER:
            self._statements[kind] = self._gen_transfer

    def generate(self, root):
        """Emit code for ``root``; ``None`` produces nothing."""
        if root is None:
            return
        handler = self._statements.get(root.nodetype)
        if handler is not None:
            handler(root)
        else:
            self.compile_expression(root)

    # Emission helpers.

    def _emit_counted(self, text, count):
        self.lines.extend(text.split("\n"))
        self.out_linecount += count

    def _emit_uncounted(self, text):
        self.lines.append(text)

    # Statements.

    def _gen_stmtlist(self, node):
        self.generate(node.ptr1)
        self.generate(node.ptr2)

    def _gen_simple(self, node):
        self.emit(_SIMPLE[node.nodetype])

    def _value_operand(self, node):
        """Operand text for a register, number or string source, else None."""
        if node.nodetype == NodeType.REG:
            return register_name(node.value)
        if node.nodetype == NodeType.NUM:
            return str(node.value)
        if node.nodetype == NodeType.STRING:
            return node.name
        return None

    def _store_into(self, dest, source):
        """Emit a store of ``source`` into the destination text ``dest``."""
        operand = self._value_operand(source)
        if operand is not None:
            self.emit(f"MOV {dest}, {operand}")
        elif source.nodetype == NodeType.PORT:
            scratch = self._next()
            port = register_name(source.value)
            self._emit_counted(f"PORT {scratch}, {port}\nMOV {dest}, {scratch}", 1)
        else:
            self.compile_expression(source)
            self.emit(f"MOV {dest}, {self._top()}")
            self._shrink()

    def _gen_assign(self, node):
        target, source = node.ptr1, node.ptr2
        if target.nodetype != NodeType.ADDR_EXPR:
            self._store_into(register_name(target.value), source)
            return
        address = target.ptr1
        if address.nodetype == NodeType.NUM:
            self._store_into(f"[{address.value}]", source)
        elif address.nodetype == NodeType.REG:
            self._store_into(f"[{register_name(address.value)}]", source)
        else:
            self.compile_expression(address)
            operand = self._value_operand(source)
            if operand is not None:
                self.emit(f"MOV [{self._top()}], {operand}")
            elif source.nodetype == NodeType.PORT:
                scratch = self._next()
                port = register_name(source.value)
                self._emit_counted(
                    f"PORT {scratch}, {port}\nMOV [{self._top()}], {scratch}", 1
                )
            else:
                self.compile_expression(source)
                self.emit(f"MOV [{self._top(2)}], {self._top()}")
                self._shrink()
            self._shrink()

    def _jump_if_zero(self, condition, label):
        if condition.nodetype == NodeType.REG:
            self.emit(f"JZ {register_name(condition.value)}, {label.name}")
        else:
            self.compile_expression(condition)
            self.emit(f"JZ {self._top()}, {label.name}")
            self._shrink()

    def _gen_if(self, node):
        else_label = self.labels.create()
        end_label = self.labels.create()
        self._jump_if_zero(node.ptr1, else_label)
        self.generate(node.ptr2)
        self.emit(f"JMP {end_label.name}")
        self._emit_label(else_label.name)
        self.generate(node.ptr3)
        self._emit_label(end_label.name)

    def _gen_while(self, node):
        start = self.labels.create()
        end = self.labels.create()
        self.labels.push_while(start, end)
        self._emit_label(start.name)
        self._jump_if_zero(node.ptr1, end)
        self.generate(node.ptr2)
        self.emit(f"JMP {start.name}")
        self.labels.pop_while()
        self._emit_label(end.name)

    def _gen_break(self, node):
        self.emit(f"JMP {self.labels.while_end().name}")

    def _gen_continue(self, node):
        self.emit(f"JMP {self.labels.while_start().name}")

    def _gen_transfer(self, node):
        opcode = _TRANSFER[node.nodetype]
        left, right = node.ptr1, node.ptr2
        if left.nodetype == NodeType.REG:
            first = register_name(left.value)
            nested = False
        else:
            self.compile_expression(left)
            first = self._top()
            nested = True
        if right.nodetype == NodeType.REG:
            self.emit(f"{opcode} {first}, {register_name(right.value)}")
        elif right.nodetype == NodeType.NUM:
            self.emit(f"{opcode} {first}, {right.value}")
        else:
            self.compile_expression(right)
            self.emit(f"{opcode} {first}, {self._top()}")
            self._shrink()
        if nested:
            self._shrink()

    @staticmethod
    def _chain(node):
        registers = []
        while node is not None:
            registers.append(node)
            node = node.ptr1
        return registers

    def _gen_multipush(self, node):
        for item in self._chain(node.ptr1):
            self.emit(f"PUSH {register_name(item.value)}")

    def _gen_multipop(self, node):
        for item in reversed(self._chain(node.ptr1)):
            self.emit(f"POP {register_name(item.value)}")

    def _gen_readi(self, node):
        self.emit(f"INI\nPORT {register_name(node.ptr1.value)}, P0")

    def _gen_print(self, node):
        self.compile_expression(node.ptr1)
        self.emit(f"PORT P1, {self._top()}\nOUT")
        self._shrink()

    def _gen_inline(self, node):
        self.emit(node.ptr1.name)

    def _gen_encrypt(self, node):
        self.emit(f"ENCRYPT {register_name(node.ptr1.value)}")

    def _gen_label_def(self, node):
        self._emit_label(node.ptr1.name)

    def _named_target(self, node):
        target = node.ptr1
        if target.nodetype == NodeType.NUM:
            return str(target.value)
        if self.labels.get(target.name) is None:
            raise SplError(f"{node.value}: Label '{target.name}' is not declared")
        return target.name

    def _gen_call(self, node):
        self._emit_uncounted(f"CALL {self._named_target(node)}")

    def _gen_goto(self, node):
        self._emit_uncounted(f"JMP {self._named_target(node)}")