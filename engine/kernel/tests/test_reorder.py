"""
Model Kernel: Reorder Tests

Splice semantics and every rejection path of move().
"""

import pytest

from engine.kernel.reorder import index_of, move


def _names(seq):
    return [item["name"] for item in seq]


@pytest.fixture
def columns():
    return [{"name": "A"}, {"name": "B"}, {"name": "C"}, {"name": "D"}]


class TestMove:
    def test_move_forward(self, columns):
        """Splice out then insert in the shortened list."""
        result = move(columns, "B", 3)
        assert result.moved
        assert _names(columns) == ["A", "C", "D", "B"]
        assert result.to_dict() == {"old_position": 1, "new_position": 3, "length": 4}

    def test_move_backward(self, columns):
        move(columns, "D", 0)
        assert _names(columns) == ["D", "A", "B", "C"]

    def test_same_position_is_noop(self, columns):
        result = move(columns, "C", 2)
        assert result.moved
        assert _names(columns) == ["A", "B", "C", "D"]

    def test_custom_key(self):
        buttons = [{"buttonText": "Back"}, {"buttonText": "Add"}]
        result = move(buttons, "Add", 0, key="buttonText")
        assert result.moved
        assert [b["buttonText"] for b in buttons] == ["Add", "Back"]


@pytest.mark.parametrize("name", ["A", "B", "C", "D"])
@pytest.mark.parametrize("new_index", [0, 1, 2, 3])
def test_every_move_keeps_the_others_in_order(name, new_index):
    """Any valid move is a permutation that lands the element at new_index."""
    seq = [{"name": n} for n in "ABCD"]
    result = move(seq, name, new_index)

    assert result.moved
    assert sorted(_names(seq)) == ["A", "B", "C", "D"]
    assert _names(seq)[new_index] == name
    others = [n for n in "ABCD" if n != name]
    assert [n for n in _names(seq) if n != name] == others


class TestMoveRejections:
    def test_negative(self, columns):
        result = move(columns, "A", -1)
        assert not result.moved
        assert result.error == "new_position must be >= 0"

    def test_out_of_bounds(self, columns):
        result = move(columns, "A", 4)
        assert result.error == "new_position 4 is out of bounds (max: 3)"
        assert _names(columns) == ["A", "B", "C", "D"]

    def test_not_an_int(self, columns):
        assert not move(columns, "A", "2").moved
        assert not move(columns, "A", True).moved

    def test_empty_sequence(self):
        result = move([], "A", 0)
        assert not result.moved
        assert "empty" in result.error

    def test_name_is_case_sensitive(self, columns):
        result = move(columns, "b", 0)
        assert result.error == '"b" not found'
        assert _names(columns) == ["A", "B", "C", "D"]


def test_index_of():
    assert index_of([{"name": "X"}, {"name": "Y"}], "Y") == 1
    assert index_of([{"name": "X"}], "x") is None
