import math

from pytest import mark

from vecmap import Ordering, check_total_order, float_order, float_total_order, natural_order

NAN = float("nan")

FLOAT_SAMPLES = [
    -math.inf,
    -1.5,
    -0.0,
    0.0,
    1e-300,
    2.0,
    math.inf,
    NAN,
    float("-nan"),
]


@mark.parametrize(
    "one, other, expected",
    [
        (1.0, 2.0, Ordering.LESS),
        (2.0, 1.0, Ordering.GREATER),
        (1.0, 1.0, Ordering.EQUAL),
        (-0.0, 0.0, Ordering.EQUAL),
        (NAN, 1.0, Ordering.GREATER),
        (1.0, NAN, Ordering.LESS),
        (NAN, math.inf, Ordering.GREATER),
        (-math.inf, NAN, Ordering.LESS),
    ],
)
def test_float_order_ordinary_and_single_nan(one, other, expected):
    assert float_order(one, other) is expected
    assert float_total_order(one, other) is expected


def test_float_order_both_nan_is_less():
    # reference behaviour, kept as documented even though it is not reflexive
    assert float_order(NAN, NAN) is Ordering.LESS


def test_float_total_order_both_nan_is_equal():
    assert float_total_order(NAN, NAN) is Ordering.EQUAL


@mark.parametrize("x", FLOAT_SAMPLES, ids=repr)
def test_float_total_order_is_reflexive(x):
    assert float_total_order(x, x) == Ordering.EQUAL


@mark.xfail(strict=True, reason="float_order(nan, nan) is LESS; reflexivity is violated, open for product decision")
@mark.parametrize("x", [NAN, float("-nan")], ids=repr)
def test_float_order_is_reflexive(x):
    assert float_order(x, x) == Ordering.EQUAL


def test_float_order_is_reflexive_on_ordinary_values():
    for x in FLOAT_SAMPLES[:-2]:
        assert float_order(x, x) == Ordering.EQUAL


def test_check_total_order_accepts_lawful_comparators():
    assert check_total_order(float_total_order, FLOAT_SAMPLES) == []
    assert check_total_order(natural_order, [3, 1, 2, -7]) == []
    assert check_total_order(natural_order, ["b", "a", "ab"]) == []


def test_check_total_order_flags_nan_reflexivity(caplog):
    problems = check_total_order(float_order, FLOAT_SAMPLES)
    assert any(p.startswith("reflexivity") for p in problems)
    assert any(p.startswith("antisymmetry") for p in problems)
    assert "not a total order" in caplog.text


def test_natural_comparison_of_floats_is_not_total():
    problems = check_total_order(natural_order, [1.0, NAN, 2.0])
    assert problems


def test_ordering_is_usable_as_three_way_int():
    assert Ordering.LESS < 0 < Ordering.GREATER
    assert Ordering.EQUAL == 0
