from scrawl.interpreter import compile_module


def test_program_factorial_recursion(capsys, example_path):
    interp = compile_module(str(example_path('factorial.scrawl')))
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['1', '2', '6', '24', '120']
    # every call frame was popped again
    assert interp.env.depth == 0
    assert interp.call_depth == 0
