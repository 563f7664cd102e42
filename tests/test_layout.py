import pytest

from dactyl_shell.layout import inner_addresses, key_addresses, key_holes, key_holes_inner, main_addresses, wide_addresses
from dactyl_shell.parameters import ShapeParameters
from dactyl_shell.predicates import has_key, log_degraded_toggles, pinky_15u_active


def test_default_matrix(params):
    assert inner_addresses(params) == [(0, 0), (0, 1), (0, 2)]
    bottom = [(column, row) for column, row in main_addresses(params) if row == params.lastrow]
    assert bottom == [(3, 4), (4, 4)]
    assert len(key_addresses(params)) == 3 + 6 * 4 + 2


def test_matrix_without_inner_column():
    params = ShapeParameters(inner_column=False)
    assert inner_addresses(params) == []
    bottom = [(column, row) for column, row in main_addresses(params) if row == params.lastrow]
    assert bottom == [(2, 4), (3, 4)]
    assert len(key_addresses(params)) == 7 * 4 + 2


def test_extra_row_fills_outer_columns():
    params = ShapeParameters(extra_row=True)
    bottom = [(column, row) for column, row in main_addresses(params) if row == params.lastrow]
    assert bottom == [(3, 4), (4, 4), (5, 4), (6, 4)]


def test_addresses_are_unique(params):
    addresses = key_addresses(params)
    assert len(addresses) == len(set(addresses))


def test_has_key_outside_matrix(params):
    assert not has_key(params, -1, 0)
    assert not has_key(params, params.ncols, 0)
    assert not has_key(params, 0, params.nrows - 2)


def test_wide_keys(params):
    assert wide_addresses(params) == [(6, 0), (6, 1), (6, 2), (6, 3)]


@pytest.mark.parametrize("first, last", [(3, 1), (-1, 2), (0, 4)])
def test_unusable_pinky_range_degrades(first, last, caplog):
    params = ShapeParameters(first_15u_row=first, last_15u_row=last)
    assert not pinky_15u_active(params)
    assert wide_addresses(params) == []

    log_degraded_toggles(params)
    assert "1.5u rows" in caplog.text


def test_key_holes_cover_every_address(params, engine):
    holes = key_holes(params, engine)
    inner = key_holes_inner(params, engine)
    assert holes.shape[1] == 3
    # the inner column sits left of the rest of the matrix
    assert inner[:, 0].min() < holes[:, 0].min()


def test_key_holes_inner_without_inner_column(engine):
    assert key_holes_inner(ShapeParameters(inner_column=False), engine) is None

