from scrawl.interpreter import parse_program, Interpreter


def test_program_hello(capsys, example_path):
    with open(example_path('hello.scrawl'), 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.strip()
    assert out == 'Hello World!!'
