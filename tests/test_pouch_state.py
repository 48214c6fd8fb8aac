import pytest

from essence_pouch.pouches import ALL_POUCHES, COLOSSAL, GIANT, MEDIUM, SMALL
from essence_pouch.state import UNKNOWN_FILLS_RATIO, PouchState


def known(kind, stored=0, remaining=None, degraded=False):
    return PouchState.full(
        kind,
        stored,
        kind.max_usage_before_decay if remaining is None else remaining,
        degraded,
        True,
        False,
        False,
    )


def test_fresh_state_is_fully_unknown(twelve_kind):
    s = PouchState(twelve_kind)
    assert s.stored_essence == 0
    assert s.remaining_before_decay == 5
    assert s.is_degraded is False
    assert s.should_degrade is True
    assert s.unknown_stored is True
    assert s.unknown_decay is True
    assert s.is_empty()
    ratio = s.approximate_fills_left()
    assert ratio == UNKNOWN_FILLS_RATIO
    assert 0 < ratio < 1


def test_with_amount_defaults_decay_to_max():
    s = PouchState.with_amount(GIANT, 7, False, True)
    assert s.stored_essence == 7
    assert s.remaining_before_decay == GIANT.max_usage_before_decay
    assert s.is_degraded is False
    assert s.should_degrade is True
    assert s.unknown_stored is False
    assert s.unknown_decay is True


@pytest.mark.parametrize(
    "build",
    [
        lambda: PouchState(SMALL),
        lambda: PouchState(SMALL, should_degrade=True),
        lambda: PouchState.with_amount(SMALL, 2, False, False),
        lambda: PouchState.full(SMALL, 1, 0, False, True, False, False),
    ],
)
def test_exempt_kind_never_decays(build):
    s = build()
    assert s.should_degrade is False
    assert s.approximate_fills_left() == 1
    s.should_degrade = True
    assert s.should_degrade is False
    s.fill(3)
    assert s.approximate_fills_left() == 1


def test_kind_cannot_be_reassigned():
    s = PouchState(GIANT)
    with pytest.raises(AttributeError):
        s.kind = COLOSSAL  # type: ignore[misc]
    assert s.kind is GIANT


@pytest.mark.parametrize("kind", ALL_POUCHES)
@pytest.mark.parametrize("amount", [0, 1, 5, 1000])
def test_unknown_stored_refuses_fill_and_empty(kind, amount):
    s = PouchState.full(kind, 2, 10, False, True, True, False)
    assert s.empty(amount) == 0
    assert s.fill(amount, False) == 0
    assert s.fill(amount, True) == 0
    assert s.stored_essence == 2
    assert s.remaining_before_decay == 10
    assert s.unknown_stored is True


@pytest.mark.parametrize("stored,requested", [(0, 3), (5, 3), (5, 5), (5, 9), (12, 0)])
def test_empty_removes_min_of_request_and_stored(twelve_kind, stored, requested):
    s = known(twelve_kind, stored)
    removed = s.empty(requested)
    assert removed == min(requested, stored)
    assert s.stored_essence == stored - removed
    assert s.unknown_stored is False


def test_fill_spends_decay_budget_when_known():
    s = known(GIANT, 0)
    stored = s.fill(8)
    assert stored == 8
    assert s.remaining_before_decay == GIANT.max_usage_before_decay - 8


def test_fill_ignoring_decay_keeps_budget():
    s = known(GIANT, 0)
    assert s.fill(8, ignore_decay=True) == 8
    assert s.remaining_before_decay == GIANT.max_usage_before_decay


def test_fill_with_unknown_decay_keeps_budget():
    s = PouchState.with_amount(GIANT, 0, False, True)
    assert s.fill(8) == 8
    assert s.remaining_before_decay == GIANT.max_usage_before_decay
    assert s.unknown_decay is True


@pytest.mark.parametrize(
    "state",
    [
        PouchState.full(GIANT, 0, 50, False, False, False, False),
        PouchState.full(SMALL, 0, 50, False, True, False, False),
    ],
    ids=["tracking-disabled", "exempt-kind"],
)
def test_fill_without_decay_tracking_keeps_budget(state):
    stored = state.fill(8, False)
    assert stored == min(8, state.kind.max_capacity)
    assert state.stored_essence == stored
    assert state.remaining_before_decay == 50
    assert state.unknown_decay is False


def test_fill_overflow_is_discarded_and_budget_goes_negative(twelve_kind):
    s = PouchState.full(twelve_kind, 3, 5, False, True, False, False)
    assert s.fill(10, False) == 9
    assert s.stored_essence == 12
    assert s.remaining_before_decay == -4
    assert s.is_filled()
    assert s.approximate_fills_left() == pytest.approx(-0.8)


def test_fill_then_empty_round_trip():
    s = known(COLOSSAL, 10)
    stored = s.fill(15, ignore_decay=True)
    assert s.empty(stored) == stored
    assert s.stored_essence == 10


def test_setters_accept_out_of_range_values(twelve_kind):
    s = PouchState(twelve_kind)
    s.set_stored_essence(40)
    assert s.stored_essence == 40
    assert s.unknown_stored is False
    assert s.unknown_decay is True
    assert s.available_space() == -28
    # min(incoming, available) is negative here, pulling stored back to capacity
    assert s.fill(5) == -28
    assert s.stored_essence == 12
    s.set_remaining_before_decay(-50)
    assert s.remaining_before_decay == -50
    assert s.unknown_decay is False


def test_setters_are_independent():
    s = PouchState(MEDIUM)
    s.set_remaining_before_decay(100)
    assert s.unknown_decay is False
    assert s.unknown_stored is True
    assert s.stored_essence == 0


@pytest.mark.parametrize("degraded", [True, False])
@pytest.mark.parametrize("unknown_decay", [True, False])
def test_repair_restores_budget(degraded, unknown_decay):
    s = PouchState.full(GIANT, 4, -30, degraded, True, False, unknown_decay)
    s.repair()
    assert s.is_degraded is False
    assert s.remaining_before_decay == GIANT.max_usage_before_decay
    assert s.unknown_decay is False
    assert s.stored_essence == 4


def test_degraded_capacity_never_exceeds_normal():
    for kind in ALL_POUCHES:
        assert known(kind, degraded=True).maximum_capacity() <= known(kind).maximum_capacity()
        assert known(kind, degraded=True).maximum_capacity() == kind.max_degraded_capacity


def test_degrade_does_not_clamp_stored():
    s = known(GIANT, 12)
    s.degrade()
    assert s.is_degraded
    assert s.maximum_capacity() == 9
    assert s.stored_essence == 12
    assert s.available_space() == -3
    assert not s.is_filled()


def test_resets():
    s = PouchState.full(MEDIUM, 4, 2, False, True, True, True)
    s.reset_stored()
    assert s.stored_essence == 0 and s.unknown_stored is False
    assert s.unknown_decay is True
    s.reset_decay()
    assert s.remaining_before_decay == MEDIUM.max_usage_before_decay
    assert s.unknown_decay is False

    s = PouchState(COLOSSAL)
    s.set_stored_essence(20)
    s.set_remaining_before_decay(3)
    s.reset()
    assert s.is_empty()
    assert s.remaining_before_decay == COLOSSAL.max_usage_before_decay
    assert not s.unknown_stored and not s.unknown_decay


def test_creation_is_logged(caplog):
    caplog.set_level("DEBUG", logger="essence_pouch.state")
    PouchState(GIANT)
    assert "Created new pouch state" in caplog.text
    assert "Giant Pouch" in caplog.text
