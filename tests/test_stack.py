import pytest

from stripaster.stack import (
    BoundedStack,
    StackEmptyError,
    StackFullError,
    main,
    pop_all,
    push_all,
)


def test_push_pop_is_lifo():
    stack = BoundedStack(3)
    stack.push(1)
    stack.push(2)
    stack.push(3)
    assert [stack.pop(), stack.pop(), stack.pop()] == [3, 2, 1]


def test_len_tracks_items():
    stack = BoundedStack(4)
    stack.push(10)
    stack.push(20)
    assert len(stack) == 2
    stack.pop()
    assert len(stack) == 1


def test_full_and_empty_flags():
    stack = BoundedStack(1)
    assert stack.is_empty() is True
    assert stack.is_full() is False
    stack.push(5)
    assert stack.is_full() is True
    assert stack.is_empty() is False


def test_push_onto_full_raises():
    stack = BoundedStack(2)
    stack.push(1)
    stack.push(2)
    with pytest.raises(StackFullError):
        stack.push(3)
    assert len(stack) == 2


def test_pop_from_empty_raises():
    with pytest.raises(StackEmptyError):
        BoundedStack(2).pop()


@pytest.mark.parametrize("size", [0, -1])
def test_nonpositive_size_rejected(size):
    with pytest.raises(ValueError):
        BoundedStack(size)


def test_push_all_fills_to_capacity():
    stack = BoundedStack(3)
    pushed = push_all(stack, 0xFF00)
    assert pushed == [0xFF00, 0xFF00 - 1, 0xFF00 - 2]
    assert stack.is_full()


def test_pop_all_reverses_push_all():
    stack = BoundedStack(5)
    pushed = push_all(stack, 100)
    popped = pop_all(stack)
    assert popped == list(reversed(pushed))
    assert stack.is_empty()


def test_pop_all_on_empty_stack():
    assert pop_all(BoundedStack(2)) == []


def test_main_prints_both_demonstrations(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "item[0] = 0xFF00 pushed onto the stack" in out
    assert "item[0] = 0xABCD pushed onto the stack" in out
    assert out.count("3 items pushed onto the stack.") == 2
    assert out.count("3 items popped off the stack.") == 2