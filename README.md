# orbc

Building blocks for the front end of a compiler for the Orb language.
The package holds the compiler's bookkeeping: types, scopes, names, literals and command-line options.

## Modules

- `orbc.program_args`: `parse_args(argv)` turns the compiler's options into a `ProgramArgs` record. `argv` is the argument list without the program name. Options are `-c`, `-emit-llvm`, `-o <file>`, `-O<num>` (0 to 3) and `-I<dir>`. Invalid input raises `ArgsError`, whose `messages` list holds every problem found. `print_help(out)` writes the usage text.
- `orbc.unescape`: `unescape(text, start, single_quote)` reads a quoted literal from `start` up to its closing quote. It handles `\'`, `\"`, `\?`, `\\`, `\a`, `\b`, `\f`, `\n`, `\r`, `\t`, `\v`, `\0` and `\xNN`. It returns an `UnescapeResult` with an `UnescapeStatus` of `SUCCESS`, `SUCCESS_UNCLOSED` or `FAILURE`.
- `orbc.string_pool`: `StringPool` interns strings. `add` returns a stable integer id, `get` looks a string up by id, and `print_all` lists every entry in id order.
- `orbc.reserved`: the enums `Meaningful`, `Keyword` and `Oper`, the `OperInfo` record, the `OPER_INFOS` table, and `Reserved`. `Reserved` maps name ids to their reserved meaning and answers `is_reserved`.
- `orbc.types`: `TypeId`, `TypeKind`, `PrimId`, and the type descriptions `TypeDescr`, `Decor`, `Tuple`, `ExplicitType`, `DataType`, `ElemEntry` and `Callable`. It also has the helpers `shortest_fitting_prim_i` and `shortest_fitting_prim_f`.
- `orbc.type_store`: `TypeStore` stores types and answers the `is_*`, `works_as_*` and `extract_*` queries. Tuples, type descriptions and callables are deduplicated, so two equal types share one `TypeId`.
- `orbc.type_table`: `TypeTable` extends `TypeStore`. It builds derived types: pointers, dereference, indexing, arrays, constant versions and signature forms. It also checks whether a literal fits a type and whether one type casts implicitly to another. `make_bin_string` produces mangled type names.
- `orbc.symbol_ids`: `VarId`, `FuncId` and `MacroId`.
- `orbc.callables`: `FuncValue` and `MacroValue`, which share `BaseCallableValue`, and `PreHandling` with its `escape_score`.
- `orbc.symbol_table`: `SymbolTable` tracks nested blocks and callables, variables, overloaded functions and macros. It also keeps per-type attributes and drop functions, and lists the values to drop when a scope is left. A clashing registration raises `RegistrationError`, whose `kind` is a `RegisterKind`.
- `orbc.values`: `Token` and `TokenType`, `SpecialVal`, `UndecidedCallableVal`, and the `EvaluatorJump` exception.
- `orbc.terminal`: ANSI sequences for coloured diagnostics (`terminal_set`, `terminal_set_bold`, `terminal_reset`, `TerminalColor`).
- `orbc.utils`: `between` and 64-bit wrapping arithmetic (`add_with_wrap`, `sub_with_wrap`, `mul_with_wrap`, `shl_with_wrap`).

## Installation

Install the package with your usual Python package installer. It has no runtime dependencies. The `test` extra pulls in pytest.

## Examples

Unescape a double-quoted literal. Scanning starts just past the opening quote:

```python
from orbc.unescape import unescape, UnescapeStatus

result = unescape('"hello\\tworld"', 1, False)
assert result.status is UnescapeStatus.SUCCESS
assert result.unescaped == "hello\tworld"
```

Intern strings:

```python
from orbc.string_pool import StringPool

pool = StringPool()
first = pool.add("greeting")
assert pool.add("greeting") == first
assert pool.get(first) == "greeting"
```

Parse compiler options:

```python
from orbc.program_args import parse_args, ArgsError

args = parse_args(["-O2", "-c", "main.orb"])
assert args.opt_level == 2
assert args.link is False

try:
    parse_args(["-O9", "main.orb"])
except ArgsError as err:
    print(err)  # Bad optimization level specified.
```

Work with types:

```python
from orbc.type_table import TypeTable
from orbc.types import PrimId

table = TypeTable()
i32 = table.get_prim_type_id(PrimId.I32)
ptr = table.add_type_addr_of(i32)
assert table.works_as_type_p(ptr)
assert table.add_type_deref_of(ptr) == i32
assert table.works_as_type_str(table.str_type_id())
```

## What the package does not do

The package has no lexer, parser, evaluator or code generator, and it installs no command. `parse_args` checks and collects options, but nothing here reads `.orb` files or produces object files or binaries. Fields such as `FuncValue.llvm_func` or `Block.phi` are opaque slots that a code generator could fill in. The package never sets them itself.

## Running the tests

Install the `test` extra, then run `pytest` from the project root.