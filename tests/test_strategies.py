from __future__ import annotations

from decimal import Decimal

import deal
import pytest
from hypothesis import assume, given, strategies as st

from models import SplitMethod
from money import MAX_CENTS
from strategies import allocate, get_split_strategy, round_cents, split_evenly

IDS = ["p%02d" % i for i in range(40)]
TOTAL = st.integers(min_value=0, max_value=10_000_000)
PEOPLE = st.integers(min_value=1, max_value=40).map(lambda n: IDS[:n])


def test_scenario_a_equal_extra_cent_goes_first() -> None:
    shares = allocate(SplitMethod.EQUAL, 10000, ["alice", "bob", "carol"], {})
    assert shares == {"alice": 3334, "bob": 3333, "carol": 3333}


def test_equal_ignores_raw_inputs() -> None:
    assert allocate(SplitMethod.EQUAL, 100, ["a", "b"], {"a": "99"}) == {"a": 50, "b": 50}


def test_equal_with_no_participants_is_empty() -> None:
    assert allocate(SplitMethod.EQUAL, 100, [], {}) == {}


def test_split_evenly_requires_participants() -> None:
    with pytest.raises(deal.PreContractError):
        split_evenly(100, [])


def test_percentage_split() -> None:
    shares = allocate(SplitMethod.PERCENTAGE, 5000, ["a", "b"], {"a": "60", "b": "40"})
    assert shares == {"a": 3000, "b": 2000}


def test_percentage_rounds_half_up_without_redistribution() -> None:
    shares = allocate(SplitMethod.PERCENTAGE, 1000, ["a", "b", "c"], {"a": "33.3", "b": "33.3", "c": "33.4"})
    assert shares == {"a": 333, "b": 333, "c": 334}
    shares = allocate(SplitMethod.PERCENTAGE, 5, ["a", "b"], {"a": "50", "b": "50"})
    assert shares == {"a": 3, "b": 3}  # 2.5 rounds up for both; sum exceeds total


def test_percentage_missing_or_garbage_input_is_zero() -> None:
    shares = allocate(SplitMethod.PERCENTAGE, 1000, ["a", "b", "c"], {"a": "100", "b": "lots"})
    assert shares == {"a": 1000, "b": 0, "c": 0}


def test_exact_amount_takes_inputs_verbatim() -> None:
    shares = allocate(SplitMethod.AMOUNT, 1000, ["a", "b"], {"a": "7.255", "b": "2.75"})
    assert shares == {"a": 725, "b": 275}


def test_scenario_c_adjustments() -> None:
    shares = allocate(SplitMethod.ADJUSTMENT, 9000, ["a", "b", "c"], {"a": "10", "b": "0", "c": "-10"})
    assert shares == {"a": 4000, "b": 3000, "c": 2000}
    assert sum(shares.values()) == 9000


def test_adjustment_remainder_follows_sorted_order() -> None:
    shares = allocate(SplitMethod.ADJUSTMENT, 1000, ["a", "b", "c"], {"c": "0.01"})
    # 999 left over three people -> 333 each, then c gets its extra cent back
    assert shares == {"a": 333, "b": 333, "c": 334}


def test_scenario_e_shares_within_tolerance() -> None:
    shares = allocate(SplitMethod.SHARES, 1000, ["a", "b", "c"], {"a": "1", "b": "1", "c": "1"})
    assert abs(sum(shares.values()) - 1000) <= 2
    assert sorted(shares.values())[0] == 333


def test_shares_proportional() -> None:
    shares = allocate(SplitMethod.SHARES, 1000, ["a", "b"], {"a": "3", "b": "1"})
    assert shares == {"a": 750, "b": 250}


def test_shares_all_zero() -> None:
    assert allocate(SplitMethod.SHARES, 1000, ["a", "b"], {}) == {"a": 0, "b": 0}


def test_round_cents_is_capped() -> None:
    assert round_cents(Decimal("1e40")) == MAX_CENTS
    assert round_cents(Decimal("-1e40")) == -MAX_CENTS
    assert round_cents(Decimal("2.5")) == 3


def test_out_of_range_shares_count_as_zero() -> None:
    assert allocate(SplitMethod.SHARES, 1000, ["a", "b"], {"a": "1e999999", "b": "1"}) == {"a": 0, "b": 1000}


def test_every_method_has_a_strategy() -> None:
    for method in SplitMethod:
        assert get_split_strategy(method).method is method


@given(TOTAL, PEOPLE)
def test_equal_split_is_exact_and_fair(total: int, people: list) -> None:
    shares = allocate(SplitMethod.EQUAL, total, people, {})
    assert sum(shares.values()) == total
    assert max(shares.values()) - min(shares.values()) <= 1


@given(TOTAL, PEOPLE, st.data())
def test_adjustment_split_is_exact(total: int, people: list, data) -> None:
    adjustments = data.draw(st.lists(
        st.integers(min_value=-100_000, max_value=100_000), min_size=len(people), max_size=len(people)
    ))
    assume(sum(adjustments) <= total)
    raw = {pid: "%d.%02d" % divmod(c, 100) if c >= 0 else "-%d.%02d" % divmod(-c, 100)
           for pid, c in zip(people, adjustments)}
    shares = allocate(SplitMethod.ADJUSTMENT, total, people, raw)
    assert sum(shares.values()) == total


@given(st.integers(min_value=1, max_value=1_000_000), st.integers(min_value=1, max_value=12))
def test_equal_share_counts_stay_close_to_total(total: int, n: int) -> None:
    people = IDS[:n]
    shares = allocate(SplitMethod.SHARES, total, people, {pid: "1" for pid in people})
    assert abs(sum(shares.values()) - total) <= n // 2 + 1
