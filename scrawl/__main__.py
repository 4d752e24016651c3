"""CLI entry point for the Scrawl interpreter.

Usage:
    python -m scrawl [-v|-vv|-vvv] <program_file>
    python -m scrawl --tree <program_file>
    python -m scrawl [-v...] --emit-ast <program_file>
    python -m scrawl [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --tree        Print the parsed AST of the program instead of running it
  --emit-ast    Parse the given .scrawl file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .ast_json import ast_to_obj, ast_from_obj
from .errors import ScrawlError
from .interpreter import parse_program, run_program, Interpreter
from .parser import draw_tree


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def emit_ast(program_file: Path) -> Path:
    ast_program = parse_program(read_source(program_file))
    out_path = program_file.with_name(program_file.name + '.ast.json')
    with open(out_path, 'w', encoding='utf-8') as out:
        json.dump(ast_to_obj(ast_program), out, ensure_ascii=False, indent=2)
    return out_path


def run_ast(ast_path: Path, debug_level: int) -> None:
    data = json.loads(read_source(ast_path))
    ast_program = ast_from_obj(data)
    Interpreter(debug_level=debug_level).run(ast_program)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Scrawl language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--tree', action='store_true', help='print the parsed AST instead of running the program')
    group.add_argument('--emit-ast', metavar='SCRAWL_FILE', help='emit AST JSON for the given .scrawl file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Scrawl program file (.scrawl) to execute')
    args = parser.parse_args(argv)

    try:
        if args.emit_ast:
            print(str(emit_ast(Path(args.emit_ast))))
            return

        if args.ast:
            run_ast(Path(args.ast), args.v)
            return

        if not args.program:
            parser.error('missing program file; or use --emit-ast/--ast')
        source = read_source(Path(args.program))
        if args.tree:
            print(draw_tree(parse_program(source)))
            return
        run_program(source, debug_level=args.v)
    except ScrawlError as e:
        print(f"{e.category} error: {e.message}", file=sys.stderr)
        sys.exit(1)
    except (OSError, ValueError, KeyError, TypeError) as e:
        # Unreadable files and malformed AST JSON.
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
