from dataclasses import dataclass
from typing import Callable, List

from scrawl.types import Value


@dataclass
class BuiltinFunction:
    name: str
    arity: int
    fn: Callable[[List[Value]], Value]

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
