import pytest

from orderlab.buffers import RingBuffer, WindowBuffer


def vslice(*values):
    return ["" if v == 0 else str(v) for v in values]


def test_ring_normal():
    b = RingBuffer(3)
    b.add("1")
    assert b.get() == vslice(1, 0, 0)
    b.add("2")
    assert b.get() == vslice(1, 2, 0)
    b.add("3")
    assert b.get() == vslice(1, 2, 3)
    b.add("4")
    assert b.get() == vslice(4, 2, 3)


def test_ring_zero_size():
    b = RingBuffer(0)
    for v in ("1", "2", "3", "4"):
        b.add(v)
        assert b.get() == []


def test_ring_one_size():
    b = RingBuffer(1)
    for n in (1, 2, 3, 4):
        b.add(str(n))
        assert b.get() == vslice(n)


def test_ring_get_returns_copy():
    b = RingBuffer(2)
    snapshot = b.get()
    snapshot[0] = "changed"
    assert b.get() == vslice(0, 0)


def test_ring_many_adds_keep_size():
    b = RingBuffer(1500)
    s = "a" * 1000
    for _ in range(3000):
        b.add(s)
    assert b.get() == [s] * 1500


def test_window_normal():
    b = WindowBuffer(3)
    b.add("1")
    assert b.get() == vslice(0, 0, 1)
    b.add("2")
    assert b.get() == vslice(0, 1, 2)
    b.add("3")
    assert b.get() == vslice(1, 2, 3)
    b.add("4")
    assert b.get() == vslice(2, 3, 4)


def test_window_zero_size():
    b = WindowBuffer(0)
    for v in ("1", "2", "3", "4"):
        b.add(v)
        assert b.get() == []


def test_window_one_size():
    b = WindowBuffer(1)
    for n in (1, 2, 3, 4):
        b.add(str(n))
        assert b.get() == vslice(n)


def test_window_many_adds_keep_size():
    b = WindowBuffer(1500)
    s = "a" * 1000
    for _ in range(3000):
        b.add(s)
    assert b.get() == [s] * 1500


@pytest.mark.parametrize("cls", [RingBuffer, WindowBuffer])
def test_negative_size_rejected(cls):
    with pytest.raises(ValueError):
        cls(-1)