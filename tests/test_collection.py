import copy
import operator
import sys
from pathlib import Path

import pytest

# Add repo root to path
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from mandel import collection as col
from mandel.collection import Collection
from mandel.errors import EmptiedCollectionError, OutOfBoundsError


def fib(n):
    if n < 2:
        return float(n)
    a, b = 1, 1
    for _ in range(2, n):
        a, b = b, a + b
    return float(b)


def fact(n):
    result = 1
    for i in range(2, n + 1):
        result *= i
    return float(result)


@pytest.fixture
def u():
    return Collection(10, fib)


@pytest.fixture
def v():
    return Collection(10, fact)


@pytest.mark.parametrize("size", [0, 1, 7, 100])
def test_generator_constructor(size):
    """Element i of a generated collection is fn(i)."""
    c = Collection(size, fib)
    assert c.size == size
    assert len(c) == size
    for i in range(size):
        assert c.get(i) == fib(i)


def test_generator_called_in_ascending_order():
    calls = []

    def fn(i):
        calls.append(i)
        return i

    Collection(5, fn)
    assert calls == [0, 1, 2, 3, 4]


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        Collection(-1, fib)


@pytest.mark.parametrize("value", [0.0, -5.0])
def test_set_then_get(value):
    c = Collection(10, fib)
    for i in range(c.size):
        c.set(i, value)
    assert all(c.get(i) == value for i in range(c.size))

    c[3] = 42.0
    assert c[3] == 42.0
    assert c.size == 10


@pytest.mark.parametrize("idx", [10, 11, -1])
def test_out_of_bounds(u, idx):
    """Indices outside [0, size) fail; negative indices are not wrapped."""
    with pytest.raises(OutOfBoundsError) as exc:
        u.get(idx)
    assert "get" in str(exc.value)

    with pytest.raises(IndexError):
        u.set(idx, 1.0)


def test_map_identity_is_noop(u):
    m = u.map(lambda x: x)
    assert m.to_list() == u.to_list()
    assert m is not u


def test_map_changes_type_and_keeps_source(u):
    labels = Collection.from_map(u, lambda x: f"{x:.0f}")
    assert labels.size == u.size
    assert labels.get(6) == "8"
    assert u.get(6) == 8.0


def test_map_is_eager_and_unaliased(u):
    m = u.map(lambda x: x * 2)
    u.set(0, 100.0)
    assert m.get(0) == 0.0


@pytest.mark.parametrize("op", [operator.add, operator.sub, operator.mul, operator.truediv])
def test_elementwise_operators(u, v, op):
    w = op(u, v)
    assert w.size == 10
    for i in range(10):
        assert w.get(i) == op(fib(i), fact(i))


def test_named_elementwise_functions(u, v):
    assert col.add(u, v).to_list() == (u + v).to_list()
    assert col.sub(u, v).to_list() == (u - v).to_list()
    assert col.mul(u, v).to_list() == (u * v).to_list()
    assert col.div(u, v).to_list() == (u / v).to_list()


def test_zip_truncates_to_shorter():
    """Sizes 5 and 3 -> size 3, using only the first 3 of the longer one."""
    a = Collection(5, lambda i: float(i + 1))
    b = Collection(3, lambda i: 10.0 * (i + 1))

    w = a.zip(b, operator.add)
    assert w.size == 3
    assert w.to_list() == [11.0, 22.0, 33.0]

    w2 = Collection.from_zip(b, a, operator.add)
    assert w2.to_list() == [11.0, 22.0, 33.0]


def test_reduce_left_fold(v):
    assert col.sum(v) == sum(fact(i) for i in range(10))

    expected = 1.0
    for i in range(10):
        expected *= fact(i)
    assert col.prod(v) == expected

    # non-commutative fold shows the order
    s = Collection(4, lambda i: str(i))
    assert s.reduce(operator.add, zero="") == "0123"


def test_reduce_empty_returns_zero():
    empty = Collection(0, fib)
    assert empty.reduce(operator.add) == 0.0
    assert col.sum(empty) == 0.0
    assert col.prod(empty) == 0.0
    assert empty.reduce(operator.add, zero="") == ""


def test_reduce_zero_not_folded():
    c = Collection(3, lambda i: float(i + 1))
    assert c.reduce(operator.mul, zero=0.0) == 6.0


def test_dot_matches_sum_of_product(u, v):
    assert col.dot(u, v) == col.sum(u * v)


def test_iteration_in_index_order(u):
    assert list(u) == [fib(i) for i in range(10)]
    # restartable
    assert list(u) == list(u)


def test_cursor_walk(u):
    cur = u.begin()
    end = u.end()
    seen = []
    while cur != end:
        seen.append(cur.value)
        cur.advance()
    assert seen == u.to_list()

    cur.retreat()
    assert cur.index == 9
    assert cur.value == fib(9)


def test_cursor_equality_uses_buffer_identity():
    a = Collection(3, float)
    b = Collection(3, float)
    assert a.to_list() == b.to_list()

    assert a.begin() == a.begin()
    assert a.end() == a.end()
    assert a.begin() != a.end()
    assert a.begin() != b.begin()


def test_empty_collection_cursors():
    c = Collection(0, fib)
    assert c.begin() == c.end()
    assert list(c) == []
    assert repr(c) == "[]"


def test_move_transfers_ownership(u):
    expected = u.to_list()
    moved = u.move()

    assert moved.to_list() == expected
    assert not u.is_valid
    assert moved.is_valid
    assert u.size == 10

    with pytest.raises(EmptiedCollectionError):
        u.get(0)
    with pytest.raises(EmptiedCollectionError):
        u.set(0, 1.0)
    with pytest.raises(EmptiedCollectionError):
        iter(u)
    with pytest.raises(EmptiedCollectionError):
        u.map(lambda x: x)
    with pytest.raises(EmptiedCollectionError):
        u + moved
    with pytest.raises(EmptiedCollectionError):
        u.reduce(operator.add)
    with pytest.raises(EmptiedCollectionError):
        u.move()


def test_no_implicit_copies(u):
    with pytest.raises(TypeError):
        copy.copy(u)
    with pytest.raises(TypeError):
        copy.deepcopy(u)

    c = u.copy()
    c.set(0, 99.0)
    assert u.get(0) == 0.0
    assert c.begin() != u.begin()


def test_repr():
    c = Collection(3, lambda i: i + 1)
    assert repr(c) == "[1,2,3]"
    c.move()
    assert "moved" in repr(c)


def test_get_returns_stored_element():
    """Elements are handed out as-is; mutable ones share state with the buffer."""
    c = Collection(2, lambda i: [i])
    first = c.get(0)
    assert first is c.get(0)
    first.append(9)
    assert c.get(0) == [0, 9]

    # immutable elements cannot be changed through the returned value
    f = Collection(2, float)
    x = f.get(1)
    x += 5.0
    assert f.get(1) == 1.0


def test_module_sum_prod_are_reductions():
    c = Collection(4, lambda i: float(i + 1))
    assert col.sum(c) == 10.0
    assert col.prod(c) == 24.0
    # the builtin is untouched for callers
    assert sum([1, 2, 3]) == 6
