from scrawl.interpreter import parse_program, Interpreter


def test_program_types_change_on_assignment(capsys, example_path):
    with open(example_path('types.scrawl'), 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['1', 'a', '5.0', 'true', 'false', '3', '1', '3.5']
