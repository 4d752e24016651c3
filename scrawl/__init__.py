# Scrawl language package
# This package provides a parser and tree-walking interpreter for the Scrawl language.
from .errors import ScrawlError
from .interpreter import run_program, compile_module, Interpreter

__all__ = [
    'run_program',
    'compile_module',
    'Interpreter',
    'ScrawlError',
]
