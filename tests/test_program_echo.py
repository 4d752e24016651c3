import builtins
from scrawl.interpreter import parse_program, Interpreter


def test_program_echo_reads_input(monkeypatch, capsys, example_path):
    inputs = iter(['Ada', '41'])
    monkeypatch.setattr(builtins, 'input', lambda prompt='': next(inputs))
    with open(example_path('echo.scrawl'), 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['Hello, Ada', '42']
