# exposkit

Building blocks for two small compilers that target the XSM machine. No
third-party libraries are required.

- `exposkit.spl`: a complete code generator for SPL, a system programming
  language for operating-system code. Given a syntax tree it produces XSM
  assembly.
- `exposkit.expl`: supporting pieces for ExpL, an application language:
  symbol tables, the heap-management runtime routines and a label-to-address
  table.

## SPL

### Registers and paths

```python
from exposkit.spl.registers import Register, is_allowed_register, register_name
from exposkit.spl.paths import expand_path, output_filename

is_allowed_register(15)          # True: R0 to R15 are available to programs
is_allowed_register(16)          # False: R16 and up hold compiler temporaries
register_name(Register.BP)       # "BP"
register_name(21)                # "P1"

output_filename("os_startup.spl")                         # "os_startup.xsm"
expand_path("$HOME/os/startup.spl", {"HOME": "/home/me"})  # "/home/me/os/startup.spl"
```

`expand_path` replaces a leading `$NAME` component with the value of the
variable (from `os.environ` when no mapping is given) and keeps the
component unchanged when the variable is unset.

### Syntax trees and code generation

Trees are built from `exposkit.spl.nodes.Node` with `term_node`,
`nonterm_node` and `create_tree`; node kinds are the members of
`exposkit.spl.nodes.NodeType`.

```python
from exposkit.spl.codegen import SplCodeGenerator
from exposkit.spl.nodes import NodeType, nonterm_node, term_node

# R0 = R1 + 5
tree = nonterm_node(
    NodeType.ASSIGN,
    term_node(NodeType.REG, None, 0),
    nonterm_node(
        NodeType.ADD,
        term_node(NodeType.REG, None, 1),
        term_node(NodeType.NUM, None, 5),
    ),
)

gen = SplCodeGenerator()
gen.generate(tree)
print(gen.text())
# MOV R16, R1
# ADD R16, 5
# MOV R0, R16
```

`SplCodeGenerator` handles statements (assignment, `if`, `while`, `break`,
`continue`, load/store, multipush/multipop, print, inline assembly, calls,
jumps, label definitions and single-word instructions) and hands expressions
to `exposkit.spl.expressions.ExpressionCompiler`, which keeps intermediate
values in registers from `R16` up. An expression that needs a fifth
temporary raises `SplError`. `out_linecount` counts the instructions emitted.

### Labels

`exposkit.spl.labels.LabelManager` hands out fresh labels (`_L1`, `_L2`, ...)
for generated code, records declared labels (`add` raises `LabelError` on a
redeclaration) and keeps the stack of enclosing `while` loops used by
`break` and `continue`. A `CALL` or `goto` to an undeclared label raises
`SplError`. Pass a manager to `SplCodeGenerator(labels)` to share it with
whatever declares the labels.

### Constants and aliases

`exposkit.spl.scope.Scope` holds symbolic constants and block-scoped
register aliases:

```python
from exposkit.spl.nodes import NodeType, term_node
from exposkit.spl.scope import Scope

scope = Scope()
scope.insert_constant("PAGE_SIZE", 512)
scope.push_alias("counter", 3)

node = scope.substitute_id(term_node(NodeType.IDENT, "counter", 0))
node.nodetype, node.value   # (NodeType.REG, 3)
```

`load_constants(path)` reads `name value` pairs, by default from
`splconstants.cfg`. Redefining a constant, reusing an alias name in the same
block, or substituting an unknown identifier raises `SplError`.

## ExpL

### Symbol tables

```python
from exposkit.expl.symbols import CompileError, SymbolTable

symbols = SymbolTable()            # variables are bound from address 4096
symbols.tinstall("integer", 1, [])
integer = symbols.tlookup("integer")

x = symbols.ginstall("x", integer, 1, None)     # x.binding == 4096
arr = symbols.ginstall("arr", integer, 10, None)  # arr.binding == 4097
f = symbols.ginstall("f", integer, -1, [])      # functions are numbered from 0

symbols.ginstall("x", integer, 1, None)         # raises CompileError
```

The table also keeps locals (`linstall`/`llookup`), parameters
(`pinstall`/`plookup`), types (`tinstall`/`tlookup`) and fields
(`finstall` collects fields for the next `tinstall`; `flookup` searches a
field list). A field typed as the `dummy` type refers to the type being
installed. `format_globals()` lists each global as `name----type-----binding`.

### Runtime routines

`exposkit.expl.runtime` returns the assembly text of three routines:
`initialize_routine()` (builds the free list of 16-word heap blocks),
`alloc_routine()` and `free_routine()`.

### Label table

```python
from exposkit.expl.ltranslate import LabelTable

table = LabelTable()
table.append("F0", 2056)
table.find("F0")       # 2056
table.find("MISSING")  # -1
table.format()         # "F0 : 2056\n"
```

## What this package does not do

- It has no lexer or parser for either language: SPL trees and ExpL symbol
  tables must be built by the caller.
- For ExpL it has no syntax tree, type checker or code generator; only the
  symbol tables, runtime routines and label table described above.
- It provides no command-line tool; nothing reads source files or writes
  `.xsm` files on its own.

## Tests

The test suite uses pytest; install the `test` extra to get it.