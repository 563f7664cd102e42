"""
Toggle predicates over ShapeParameters.

Every component asks these instead of testing the raw toggles, so a toggle
combination means the same thing to the layout, the connectors and the walls.
"""
import logging

from .parameters import ShapeParameters

# x shift of a 1.5u key so that its narrow edge stays against the previous column
PINKY_15U_SHIFT = 4.7625


def pinky_15u_active(params: ShapeParameters) -> bool:
    """
    True when the outer column has a usable 1.5u row range.

    An empty range, or one reaching outside the outer column, degrades to the
    uniform layout instead of failing.
    """
    if not params.pinky_15u:
        return False
    return 0 <= params.first_15u_row <= params.last_15u_row <= params.extra_cornerrow


def log_degraded_toggles(params: ShapeParameters):
    if params.pinky_15u and not pinky_15u_active(params):
        logging.warning(
            "1.5u rows %s..%s are empty or outside the outer column, using 1u keys",
            params.first_15u_row, params.last_15u_row,
        )


def is_wide_key(params: ShapeParameters, column: int, row: int) -> bool:
    return (
        column == params.lastcol
        and params.first_15u_row <= row <= params.last_15u_row
        and pinky_15u_active(params)
    )


def wide_key_shift(params: ShapeParameters, column: int, row: int) -> float:
    return PINKY_15U_SHIFT if is_wide_key(params, column, row) else 0.0


def has_inner_key(params: ShapeParameters, row: int) -> bool:
    """
    The inner column is two rows shorter than the matrix.
    """
    return params.inner_column and 0 <= row < params.nrows - 2


def has_extra_row_key(params: ShapeParameters, column: int) -> bool:
    """
    With extra_row the outer columns get a key on the last row as well.
    """
    return params.extra_row and params.innercol_offset + 4 <= column < params.ncols


def has_bottom_row_key(params: ShapeParameters, column: int) -> bool:
    offset = params.innercol_offset
    return column in (offset + 2, offset + 3) or has_extra_row_key(params, column)


def has_key(params: ShapeParameters, column: int, row: int) -> bool:
    if not (0 <= column < params.ncols and 0 <= row < params.nrows):
        return False
    if params.inner_column and column == 0:
        return has_inner_key(params, row)
    if row != params.lastrow:
        return True
    return has_bottom_row_key(params, column)
