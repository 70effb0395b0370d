from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from juicetracker.models.juice import (
    NEW_JUICE_ID,
    Juice,
    JuiceColor,
    clamp_rating,
    rating_description,
)


def test_first_color_is_default():
    assert JuiceColor.default() is JuiceColor.Red
    assert list(JuiceColor)[0] is JuiceColor.default()


def test_every_color_has_label_and_display_value():
    for c in JuiceColor:
        assert c.label == c.name
        assert c.hex.startswith("#FF")
        assert len(c.hex) == 9
    assert JuiceColor.Yellow.hex == "#FFFFFF00"


def test_from_name_rejects_unknown():
    assert JuiceColor.from_name("Cyan") is JuiceColor.Cyan
    with pytest.raises(KeyError):
        JuiceColor.from_name("Plaid")


def test_new_juice_defaults():
    j = Juice(NEW_JUICE_ID, "Apple", "Crisp")
    assert j.is_new
    assert j.color is JuiceColor.Red
    assert j.rating == 0
    assert not Juice(5, "a", "b").is_new


def test_juice_is_immutable():
    j = Juice(1, "Apple", "Crisp")
    with pytest.raises(FrozenInstanceError):
        j.name = "Pear"


@pytest.mark.parametrize("value, expected", [(0, 0), (4.9, 4), (5, 5), (6, 5), (-1, 0), ("3", 3)])
def test_clamp_rating(value, expected):
    assert clamp_rating(value) == expected


def test_rating_description():
    assert rating_description(0) == "0 stars"
    assert rating_description(1) == "1 star"
    assert rating_description(4) == "4 stars"


@pytest.mark.parametrize("value", ["abc", None, float("inf"), float("nan"), [3]])
def test_clamp_rating_rejects_non_finite_and_non_numeric(value):
    with pytest.raises(ValueError):
        clamp_rating(value)
