import pytest

from scrawl.ast import Block, Function
from scrawl.environment import Environment
from scrawl.errors import UndefinedError
from scrawl.types import IntValue, StringValue


def test_declare_and_get():
    env = Environment()
    env.declare('x', IntValue(1))
    assert env.get('x') == IntValue(1)
    assert env.depth == 0


def test_inner_frame_shadows_and_pop_restores():
    env = Environment()
    env.declare('x', IntValue(1))
    env.push_frame()
    env.declare('x', StringValue('inner'))
    assert env.get('x') == StringValue('inner')
    env.pop_frame()
    assert env.get('x') == IntValue(1)


def test_outer_bindings_are_visible_and_writable():
    env = Environment()
    env.declare('x', IntValue(1))
    env.push_frame()
    env.set('x', IntValue(2))
    env.pop_frame()
    assert env.get('x') == IntValue(2)


def test_pop_discards_frame_slots():
    env = Environment()
    env.declare('a', IntValue(1))
    env.push_frame()
    env.declare('b', IntValue(2))
    env.declare('c', IntValue(3))
    assert len(env.slots) == 3
    env.pop_frame()
    assert len(env.slots) == 1
    with pytest.raises(UndefinedError):
        env.get('b')


def test_redeclare_in_same_frame_overwrites():
    env = Environment()
    first = env.declare('x', IntValue(1))
    second = env.declare('x', IntValue(5))
    assert first == second
    assert env.get('x') == IntValue(5)


def test_undefined_names():
    env = Environment()
    with pytest.raises(UndefinedError) as exc:
        env.get('missing')
    assert str(exc.value) == 'Variable missing is not defined in this scope'
    with pytest.raises(UndefinedError):
        env.set('missing', IntValue(0))


def test_global_frame_cannot_be_popped():
    with pytest.raises(RuntimeError):
        Environment().pop_frame()


def test_functions_are_a_separate_namespace():
    env = Environment()
    fn = Function('f', [], Block(), is_definition=True)
    env.declare_function(fn)
    env.push_frame()
    assert env.get_function('f') is fn
    assert env.get_function('g') is None
    with pytest.raises(UndefinedError):
        env.get('f')


def test_dump_lists_every_frame():
    env = Environment()
    env.declare('x', IntValue(1))
    env.push_frame()
    assert env.dump() == "Level 0: { x: '1' }\nLevel 1: Empty"
