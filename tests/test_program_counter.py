from scrawl.interpreter import parse_program, Interpreter


def test_program_counter_while_loop(capsys, example_path):
    with open(example_path('counter.scrawl'), 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['0', '1', '2']
    assert interp.env.get('i').value == 3
