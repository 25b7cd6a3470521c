"""Tests for column selection: focus, dice, focus_if."""

import numpy as np
import pandas as pd
import pytest

from corrkit import CorrelationMatrix, VariableNotFoundError, correlate, dice, focus, focus_if
from corrkit.core.exceptions import InvalidArgumentError


@pytest.fixture
def six(cars):
    return correlate(cars, quiet=True)


def test_focus_rectangular_table(six):
    table = focus(six, ["v1", "v2"])
    assert isinstance(table, pd.DataFrame)
    assert table.shape == (6, 2)
    assert list(table.columns) == ["v1", "v2"]
    assert list(table.index) == six.names
    assert table.index.name == "term"
    assert np.isnan(table.loc["v1", "v1"])
    assert np.isnan(table.loc["v2", "v2"])
    assert table.loc["v3", "v1"] == six["v3", "v1"]


def test_focus_single_name(six):
    table = six.focus("v4")
    assert list(table.columns) == ["v4"]


def test_focus_exclude(six):
    table = focus(six, ["v1", "v2"], exclude=True)
    assert list(table.columns) == ["v3", "v4", "v5", "v6"]
    assert table.shape == (6, 4)


def test_focus_mirror_returns_square_matrix(six):
    sub = focus(six, ["v2", "v5", "v1"], mirror=True)
    assert isinstance(sub, CorrelationMatrix)
    assert sub.names == ["v2", "v5", "v1"]
    assert np.all(np.isnan(np.diag(sub.values)))
    assert sub["v5", "v1"] == six["v5", "v1"]
    np.testing.assert_array_equal(sub.values, sub.values.T)


def test_focus_exclude_mirror(six):
    sub = six.focus(["v6"], exclude=True, mirror=True)
    assert sub.names == ["v1", "v2", "v3", "v4", "v5"]


def test_dice(six):
    assert dice(six, ["v1", "v3"]) == six.focus(["v1", "v3"], mirror=True)


def test_focus_unknown_variable(six):
    with pytest.raises(VariableNotFoundError) as err:
        focus(six, ["v1", "mpg"])
    assert isinstance(err.value, LookupError)
    assert err.value.missing == ["mpg"]
    with pytest.raises(LookupError):
        six.focus("mpg", exclude=True)


def test_focus_excluding_everything(six):
    with pytest.raises(InvalidArgumentError):
        six.focus(six.names, exclude=True)


def test_focus_if(six):
    strong = focus_if(six, lambda col: (col.abs() > 0.5).any())
    assert "v6" not in strong.columns
    assert {"v1", "v2", "v3", "v4", "v5"} <= set(strong.columns)

    sub = six.focus_if(lambda col: col.name in ("v1", "v2"), mirror=True)
    assert sub.names == ["v1", "v2"]

    with pytest.raises(InvalidArgumentError):
        six.focus_if(lambda col: False)


def test_focus_does_not_mutate(six):
    before = six.values
    table = six.focus(["v1"])
    table.iloc[:, 0] = 0.0
    np.testing.assert_array_equal(six.values, before)


@pytest.mark.parametrize("name", [1, 2.5, None])
def test_non_string_names_are_unknown_variables(six, name):
    with pytest.raises(VariableNotFoundError):
        six.focus(name)
    with pytest.raises(VariableNotFoundError):
        six[name]
    with pytest.raises(VariableNotFoundError):
        six.dice([name, "v1"])
