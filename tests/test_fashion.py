"""Tests for display formatting."""

import numpy as np
import pytest

from corrkit import CorrelationMatrix, correlate, fashion
from corrkit.analysis.correlation.formatting import format_value
from corrkit.core.exceptions import InvalidArgumentError


@pytest.mark.parametrize("value, kwargs, expected", [
    (0.704, {}, ".70"),
    (-0.7, {}, "-.70"),
    (0.7, {"leading_zeros": True}, "0.70"),
    (-0.7, {"leading_zeros": True}, "-0.70"),
    (0.12345, {"decimals": 3}, ".123"),
    (1.0, {}, "1.00"),
    (-0.001, {}, ".00"),
    (float("nan"), {}, ""),
    (np.nan, {"na_print": "-"}, "-"),
    (None, {"na_print": "NA"}, "NA"),
])
def test_format_value(value, kwargs, expected):
    assert format_value(value, **kwargs) == expected


def test_fashion_matrix(equal_matrix):
    table = fashion(equal_matrix.shave())
    assert list(table.columns) == ["term", "v1", "v2", "v3"]
    assert list(table["term"]) == ["v1", "v2", "v3"]
    assert list(table["v1"]) == ["", ".70", ".70"]
    assert list(table["v3"]) == ["", "", ""]


def test_fashion_focus_table(cars):
    m = correlate(cars, quiet=True)
    table = fashion(m.focus(["v1"]), decimals=1, na_print="--")
    assert list(table.columns) == ["term", "v1"]
    assert table.loc[0, "v1"] == "--"
    assert len(table) == 6


def test_fashion_longform(equal_matrix):
    table = fashion(equal_matrix.stretch(), na_print="NA")
    assert list(table.columns) == ["x", "y", "r"]
    assert list(table["r"])[:2] == ["NA", ".70"]


def test_fashion_does_not_change_values(equal_matrix):
    equal_matrix.fashion(decimals=0)
    assert equal_matrix["v1", "v2"] == 0.7


def test_fashion_rejects_bad_input(equal_matrix):
    with pytest.raises(InvalidArgumentError):
        equal_matrix.fashion(decimals=-1)
    with pytest.raises(InvalidArgumentError):
        fashion([[0.1, 0.2]])


def test_str_renders_fashioned_table(equal_matrix):
    text = str(equal_matrix)
    assert "term" in text
    assert ".70" in text


def test_to_latex():
    m = CorrelationMatrix(np.full((2, 2), -0.25), names=["x_a", "y"])
    tex = m.to_latex(caption="Demo", label="tab:demo")
    assert r"\toprule" in tex
    assert r"\caption{Demo}" in tex
    assert r"x\_a" in tex
    assert "-0.25" in tex


def test_fashion_keeps_labels_when_a_variable_is_named_term():
    m = CorrelationMatrix(np.full((3, 3), 0.5), names=["term", "b", "c"])
    with pytest.raises(InvalidArgumentError, match="term"):
        m.fashion()

    table = m.fashion(label="variable")
    assert list(table.columns) == ["variable", "term", "b", "c"]
    assert list(table["variable"]) == ["term", "b", "c"]
    assert list(table["term"]) == ["", ".50", ".50"]

    focused = fashion(m.focus(["term"]), label="row")
    assert list(focused["row"]) == ["term", "b", "c"]


def test_to_latex_and_str_with_a_term_variable():
    m = CorrelationMatrix(np.full((2, 2), 0.5), names=["term", "b"])
    rows = m.to_latex().splitlines()
    assert r"term &  & 0.50 \\" in rows
    assert r"b & 0.50 &  \\" in rows
    assert "_term" in str(m)


@pytest.mark.parametrize("decimals", [np.int64(1), np.int32(1), 1])
def test_fashion_accepts_integer_like_decimals(equal_matrix, decimals):
    assert list(equal_matrix.fashion(decimals=decimals)["v2"]) == [".7", "", ".7"]


@pytest.mark.parametrize("decimals", [True, 1.5, "2", -1])
def test_fashion_rejects_non_integer_decimals(equal_matrix, decimals):
    with pytest.raises(InvalidArgumentError):
        equal_matrix.fashion(decimals=decimals)
