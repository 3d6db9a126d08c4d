import pytest

from exposkit.spl.codegen import SplCodeGenerator
from exposkit.spl.labels import LabelError, LabelManager
from exposkit.spl.nodes import NodeType, Node, nonterm_node, term_node
from exposkit.spl.registers import Register
from exposkit.spl.scope import SplError


def reg(r):
    return term_node(NodeType.REG, None, int(r))


def num(v):
    return term_node(NodeType.NUM, None, v)


def leaf(kind):
    return Node(kind)


@pytest.fixture
def gen():
    return SplCodeGenerator(LabelManager())


@pytest.mark.parametrize(
    "kind, text",
    [
        (NodeType.HALT, "HALT"),
        (NodeType.RETURN, "RET"),
        (NodeType.IRETURN, "IRET"),
        (NodeType.BREAKPOINT, "BRKP"),
        (NodeType.BACKUP, "BACKUP"),
        (NodeType.RESTORE, "RESTORE"),
        (NodeType.READ, "IN"),
        (NodeType.START, "START"),
        (NodeType.RESET, "RESET"),
    ],
)
def test_simple_statements(gen, kind, text):
    gen.generate(leaf(kind))
    assert gen.lines == [text]
    assert gen.out_linecount == 1


def test_none_generates_nothing(gen):
    gen.generate(None)
    assert gen.lines == []


def test_assign_number_to_register(gen):
    gen.generate(nonterm_node(NodeType.ASSIGN, reg(Register.R0), num(5)))
    assert gen.lines == ["MOV R0, 5"]
    assert gen.regcount == 0


def test_assign_expression_releases_temporaries(gen):
    expr = nonterm_node(NodeType.ADD, num(1), num(2))
    gen.generate(nonterm_node(NodeType.ASSIGN, reg(Register.R1), expr))
    assert gen.regcount == 0
    assert gen.lines[-1].startswith("MOV R1, R16")


def test_assign_to_expression_address_releases_temporaries(gen):
    address = nonterm_node(NodeType.ADDR_EXPR, nonterm_node(NodeType.ADD, num(1), num(2)), None)
    value = nonterm_node(NodeType.MUL, num(3), num(4))
    gen.generate(nonterm_node(NodeType.ASSIGN, address, value))
    assert gen.regcount == 0
    assert gen.lines[-1].startswith("MOV [R16]")


def test_port_assignment_counts_as_one_instruction(gen):
    port = term_node(NodeType.PORT, None, int(Register.P0))
    gen.generate(nonterm_node(NodeType.ASSIGN, reg(Register.R2), port))
    assert len(gen.lines) == 2
    assert gen.out_linecount == 1
    assert gen.lines[0].startswith("PORT ")


def test_if_else_layout(gen):
    node = Node(NodeType.IF, ptr1=reg(Register.R0), ptr2=leaf(NodeType.HALT), ptr3=leaf(NodeType.RET if hasattr(NodeType, "RET") else NodeType.RETURN))
    gen.generate(node)
    assert gen.lines.index("JMP _L2") < gen.lines.index("_L1:") < gen.lines.index("_L2:")
    labels = [line for line in gen.lines if line.endswith(":")]
    assert gen.out_linecount == len(gen.lines) - len(labels)


def test_while_with_break_and_continue(gen):
    body = nonterm_node(NodeType.STMTLIST, leaf(NodeType.BREAK), leaf(NodeType.CONTINUE))
    gen.generate(nonterm_node(NodeType.WHILE, reg(Register.R0), body))
    assert gen.lines[0] == "_L1:"
    assert gen.lines[-1] == "_L2:"
    assert "JMP _L2" in gen.lines
    assert gen.lines.count("JMP _L1") == 2
    with pytest.raises(LabelError):
        gen.labels.while_end()


def test_break_outside_loop_raises(gen):
    with pytest.raises(LabelError):
        gen.generate(leaf(NodeType.BREAK))


def test_while_condition_expression_releases_temporaries(gen):
    cond = nonterm_node(NodeType.LT, reg(Register.R0), num(10))
    gen.generate(nonterm_node(NodeType.WHILE, cond, leaf(NodeType.HALT)))
    assert gen.regcount == 0


def test_call_declared_label_is_not_counted(gen):
    gen.labels.add("handler")
    gen.generate(nonterm_node(NodeType.CALL, term_node(NodeType.IDENT, "handler", 0), None))
    assert gen.lines == ["CALL handler"]
    assert gen.out_linecount == 0


def test_call_undeclared_label_raises(gen):
    with pytest.raises(SplError):
        gen.generate(nonterm_node(NodeType.CALL, term_node(NodeType.IDENT, "missing", 0), None))


def test_goto_undeclared_label_raises(gen):
    with pytest.raises(SplError):
        gen.generate(nonterm_node(NodeType.GOTO, term_node(NodeType.IDENT, "missing", 0), None))


def test_goto_number(gen):
    gen.generate(nonterm_node(NodeType.GOTO, num(7), None))
    assert gen.lines == ["JMP 7"]


def test_multipush_and_multipop_are_mirrored(gen):
    chain = reg(Register.R0)
    chain.ptr1 = reg(Register.R1)
    chain.ptr1.ptr1 = reg(Register.R2)
    gen.generate(nonterm_node(NodeType.MULTIPUSH, chain, None))
    pushed = [line.split()[1] for line in gen.lines]
    gen.lines.clear()
    gen.generate(nonterm_node(NodeType.MULTIPOP, chain, None))
    popped = [line.split()[1] for line in gen.lines]
    assert popped == list(reversed(pushed))
    assert all(line.startswith("POP ") for line in gen.lines)


def test_print_expression(gen):
    gen.generate(nonterm_node(NodeType.PRINT, num(3), None))
    assert gen.lines[-1] == "OUT"
    assert gen.regcount == 0


def test_readi(gen):
    gen.generate(nonterm_node(NodeType.READI, reg(Register.R3), None))
    assert gen.lines[0] == "INI"
    assert gen.out_linecount == 2


def test_inline_and_label_def(gen):
    gen.generate(nonterm_node(NodeType.INLINE, term_node(NodeType.STRING, "NOP", 0), None))
    gen.generate(nonterm_node(NodeType.LABEL_DEF, term_node(NodeType.IDENT, "here", 0), None))
    assert gen.lines == ["NOP", "here:"]
    assert gen.out_linecount == 1


def test_load_with_expression_operands(gen):
    left = nonterm_node(NodeType.ADD, num(1), num(2))
    right = nonterm_node(NodeType.SUB, num(5), num(3))
    gen.generate(nonterm_node(NodeType.LOAD, left, right))
    assert gen.regcount == 0
    assert gen.lines[-1].startswith("LOAD ")


def test_store_register_and_number(gen):
    gen.generate(nonterm_node(NodeType.STORE, reg(Register.R4), num(9)))
    assert gen.lines[-1].startswith("STORE R4")
    assert gen.regcount == 0


def test_unknown_node_raises(gen):
    with pytest.raises(SplError):
        gen.generate(term_node(NodeType.IDENT, "x", 0))


def test_register_overflow(gen):
    expr = num(1)
    for value in range(2, 7):
        expr = nonterm_node(NodeType.SUB, num(value), expr)
    with pytest.raises(SplError):
        gen.generate(nonterm_node(NodeType.ASSIGN, reg(Register.R0), expr))