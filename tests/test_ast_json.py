import json

import pytest

from scrawl.ast_json import ast_from_obj, ast_to_obj
from scrawl.interpreter import Interpreter
from scrawl.parser import parse_program


SOURCE = '''
var total = 0;
function add(a, b) { return a + b; }
for (var i = 0; i < 4; i++) {
    if (i % 2 == 0) { total = add(total, i); } else { total -= 0.5; }
}
while (false) { }
output("total: " + total);
output(!true);
'''


def test_round_trip_preserves_the_tree():
    program = parse_program(SOURCE)
    data = json.loads(json.dumps(ast_to_obj(program)))
    assert ast_from_obj(data) == program


def test_loaded_tree_runs(capsys):
    data = json.loads(json.dumps(ast_to_obj(parse_program(SOURCE))))
    Interpreter().run(ast_from_obj(data))
    assert capsys.readouterr().out == 'total: 1.0\nfalse\n'


def test_tokens_and_values_are_tagged():
    data = ast_to_obj(parse_program('x = -1.5;'))
    assign = data['statements'][0]
    assert assign['token'] == {'kind': 'ASSIGN', 'lexeme': '='}
    assert assign['right']['token'] == {'kind': 'NEGATIVE', 'lexeme': '-'}
    assert assign['right']['child']['value'] == {'__type__': 'Value', 'kind': 'float', 'value': 1.5}


def test_unknown_node_type():
    with pytest.raises(ValueError):
        ast_from_obj({'type': 'Lambda'})
