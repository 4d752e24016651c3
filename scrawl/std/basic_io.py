import builtins

from scrawl.types import BoolValue, FloatValue, IntValue, StringValue, Value, VoidValue


def classify_input(line: str) -> Value:
    """Convert a line of console input into the value it looks like.

    A line containing a digit is numeric; if a '.' follows a digit it is
    a Float. The words `true`/`false` become Bools and anything else,
    including numeric-looking text that does not parse, stays a String.
    """
    has_digit = False
    has_point = False
    for c in line:
        if c.isdigit():
            has_digit = True
        elif c == '.' and has_digit:
            has_point = True
    try:
        if has_point:
            return FloatValue(float(line))
        if has_digit:
            return IntValue(int(line))
    except ValueError:
        return StringValue(line)
    if line == 'true':
        return BoolValue(True)
    if line == 'false':
        return BoolValue(False)
    return StringValue(line)


class BasicIO:
    def read_value(self) -> Value:
        try:
            line = builtins.input()
        except EOFError:
            line = ''
        return classify_input(line)

    def write_value(self, value: Value) -> VoidValue:
        print(value.to_string())
        return VoidValue()
