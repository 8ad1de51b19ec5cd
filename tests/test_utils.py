from gcorrect.utils import clamp, truncate


def test_truncate():
    assert truncate(6.25) == 6
    assert truncate(6.99) == 6
    assert truncate(0.5) == 0
    assert truncate(-0.5) == 0
    assert truncate(3) == 3


def test_clamp():
    assert clamp(-6, 0, 10) == 0
    assert clamp(12.5, 0, 10) == 10
    assert clamp(4.5, 0, 10) == 4.5
