from dataclasses import dataclass, field
from typing import Dict, List, Optional

from scrawl.ast import Function
from scrawl.errors import UndefinedError
from scrawl.types import Value


@dataclass
class Frame:
    """One level of the scope stack.

    Variables map to handles into the environment's value arena;
    functions map to their definition nodes.
    """
    base: int
    variables: Dict[str, int] = field(default_factory=dict)
    functions: Dict[str, Function] = field(default_factory=dict)


class Environment:
    """Scope stack with values stored in an arena of slots.

    Frames are pushed and popped in strict stack order, so every slot
    allocated by a frame sits above that frame's `base` and popping the
    frame simply truncates the arena. Lookups walk the frames from the
    innermost to the global frame and stop at the first match.
    """
    def __init__(self):
        self.slots: List[Value] = []
        self.frames: List[Frame] = [Frame(base=0)]

    @property
    def depth(self) -> int:
        """Index of the innermost frame; 0 means only the global frame is active."""
        return len(self.frames) - 1

    def push_frame(self) -> None:
        self.frames.append(Frame(base=len(self.slots)))

    def pop_frame(self) -> None:
        if len(self.frames) == 1:
            raise RuntimeError('cannot pop the global frame')
        frame = self.frames.pop()
        del self.slots[frame.base:]

    def declare(self, name: str, value: Value) -> int:
        frame = self.frames[-1]
        handle = frame.variables.get(name)
        # Redefining in the same frame replaces the binding.
        if handle is None:
            handle = len(self.slots)
            self.slots.append(value)
            frame.variables[name] = handle
        else:
            self.slots[handle] = value
        return handle

    def resolve(self, name: str) -> Optional[int]:
        for frame in reversed(self.frames):
            if name in frame.variables:
                return frame.variables[name]
        return None

    def get(self, name: str) -> Value:
        handle = self.resolve(name)
        if handle is None:
            raise UndefinedError('Variable', name)
        return self.slots[handle]

    def set(self, name: str, value: Value) -> None:
        handle = self.resolve(name)
        if handle is None:
            raise UndefinedError('Variable', name)
        self.slots[handle] = value

    def declare_function(self, node: Function) -> None:
        self.frames[-1].functions[node.identifier] = node

    def get_function(self, name: str) -> Optional[Function]:
        for frame in reversed(self.frames):
            if name in frame.functions:
                return frame.functions[name]
        return None

    def dump(self) -> str:
        lines = []
        for level, frame in enumerate(self.frames):
            entries = [f"{{ {name}: {self.slots[handle].to_string()!r} }}"
                       for name, handle in frame.variables.items()]
            entries.extend(f"{{ function {name} }}" for name in frame.functions)
            lines.append(f"Level {level}: " + (', '.join(entries) if entries else 'Empty'))
        return '\n'.join(lines)
