from exposkit.spl.nodes import NodeType, create_tree, nonterm_node, term_node


def test_term_node():
    node = term_node(NodeType.NUM, None, 42)
    assert node.nodetype == NodeType.NUM
    assert node.value == 42
    assert node.ptr1 is None and node.ptr2 is None and node.ptr3 is None


def test_nonterm_node():
    a = term_node(NodeType.REG, None, 1)
    b = term_node(NodeType.NUM, None, 5)
    node = nonterm_node(NodeType.ADD, a, b)
    assert node.name is None
    assert (node.ptr1, node.ptr2) == (a, b)
    assert node.ptr3 is None


def test_create_tree_returns_first():
    cond = term_node(NodeType.REG, None, 0)
    then = term_node(NodeType.HALT, None, 0)
    other = term_node(NodeType.RETURN, None, 0)
    root = term_node(NodeType.IF, None, 0)
    result = create_tree(root, cond, then, other)
    assert result is root
    assert (root.ptr1, root.ptr2, root.ptr3) == (cond, then, other)


def test_node_type_values():
    assert NodeType.IF == 0
    assert NodeType.TSL == 50
    assert term_node(NodeType.STRING, '"hi"', 0).name == '"hi"'