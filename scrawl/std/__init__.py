import random
from typing import Dict, List, Optional

from scrawl.builtin_function import BuiltinFunction
from scrawl.errors import ScrawlRuntimeError
from scrawl.types import IntValue, Value
from .basic_io import BasicIO, classify_input


def populate_standard_builtins(rng: Optional[random.Random] = None) -> Dict[str, BuiltinFunction]:
    basic_io = BasicIO()
    rng = rng or random.Random()

    def std_input(args: List[Value]) -> Value:
        return basic_io.read_value()

    def std_output(args: List[Value]) -> Value:
        return basic_io.write_value(args[0])

    def std_rand(args: List[Value]) -> Value:
        ceiling = args[0]
        if not isinstance(ceiling, IntValue):
            raise ScrawlRuntimeError(f"Invalid parameter type. Expected: 'int', Actual: '{ceiling.type_name}'")
        if ceiling.value <= 0:
            raise ScrawlRuntimeError(f"rand expects a positive bound, got {ceiling.value}")
        return IntValue(rng.randrange(ceiling.value))

    return {
        'input': BuiltinFunction('input', 0, std_input),
        'output': BuiltinFunction('output', 1, std_output),
        'rand': BuiltinFunction('rand', 1, std_rand),
    }


__all__ = ['populate_standard_builtins', 'BasicIO', 'classify_input']
