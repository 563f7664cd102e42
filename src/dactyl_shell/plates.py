import logging

from .engines.engine import GeometryEngine
from .parameters import ShapeParameters

X_NORMAL = (1, 0, 0)
Y_NORMAL = (0, 1, 0)


def inches_to_mm(val: float) -> float:
    return val * 25.4


def retention_tab_hole_thickness(params: ShapeParameters) -> float:
    return params.plate_thickness + 0.5 - params.retention_tab_thickness


def single_plate(params: ShapeParameters, engine: GeometryEngine, height_offset: float = 0.0):
    """
    A 1u switch plate with side nubs and retention tab reliefs.
    """
    logging.debug("single_plate()")
    plate_thickness = params.plate_thickness
    keyswitch_width = params.keyswitch_width
    keyswitch_height = params.keyswitch_height + height_offset

    top_wall = engine.box(keyswitch_width + 3, 1.5, plate_thickness + 0.5)
    top_wall = engine.translate(top_wall, (0, (1.5 / 2) + (keyswitch_height / 2), (plate_thickness / 2) - 0.25))

    left_wall = engine.box(1.8, keyswitch_height + 3, plate_thickness + 0.5)
    left_wall = engine.translate(left_wall, ((1.8 / 2) + (keyswitch_width / 2), 0, (plate_thickness / 2) - 0.25))

    plate_half = [top_wall, left_wall]
    if params.create_side_nubs:
        side_nub = engine.cylinder(radius=1, height=2.75)
        side_nub = engine.rotate(side_nub, (90, 0, 0))
        side_nub = engine.translate(side_nub, (keyswitch_width / 2, 0, 1))

        nub_cube = engine.box(1.5, 2.75, params.side_nub_thickness)
        nub_cube = engine.translate(nub_cube, ((1.5 / 2) + (keyswitch_width / 2), 0, params.side_nub_thickness / 2))

        side_nub = engine.convex_hull((side_nub, nub_cube))
        side_nub = engine.translate(side_nub, (0, 0, plate_thickness - params.side_nub_thickness))
        plate_half.append(side_nub)

    plate_half = engine.union(plate_half)
    other_half = engine.mirror(engine.mirror(plate_half, X_NORMAL), Y_NORMAL)

    tab_thickness = retention_tab_hole_thickness(params)
    top_nub = engine.box(5, 5, tab_thickness)
    top_nub = engine.translate(top_nub, (keyswitch_width / 2.5, 0, (tab_thickness / 2) - 0.5))
    top_nub_pair = engine.union([top_nub, engine.mirror(engine.mirror(top_nub, X_NORMAL), Y_NORMAL)])
    top_nub_pair = engine.rotate(top_nub_pair, (0, 0, 90))

    return engine.difference(engine.union([plate_half, other_half]), [top_nub_pair])


def double_plate(params: ShapeParameters, engine: GeometryEngine):
    """
    A 2u plate: a 1u plate turned sideways with filler above and below.
    """
    logging.debug("double_plate()")
    height_offset = params.plate_2u_keyswitch_height_offset
    plate_z = params.plate_thickness - (params.web_thickness / 2)

    plate_height = (params.sa_double_length - params.mount_height) / 2
    plate_width = params.mount_width
    top_plate = engine.box(plate_width, plate_height, params.web_thickness)
    top_plate = engine.translate(top_plate, (0, (plate_height + params.mount_height) / 2, plate_z))

    side_plate_width = (plate_width - (params.keyswitch_height + 3 + height_offset)) / 2
    side_plate = engine.box(side_plate_width, params.mount_height, params.web_thickness)
    side_plate = engine.translate(side_plate, ((plate_width / 2) - (side_plate_width / 2), 0, plate_z))

    switch_plate = engine.rotate(single_plate(params, engine, height_offset), (0, 0, 90))
    lower = engine.mirror(
        engine.union([top_plate, side_plate, engine.mirror(side_plate, X_NORMAL)]),
        Y_NORMAL,
    )
    return engine.union([switch_plate, top_plate, lower])


def stabilizer_cutout(params: ShapeParameters, engine: GeometryEngine, spacing: float = inches_to_mm(0.94)):
    """
    Cherry MX plate mounted stabilizer cutout, suitable for 2u, 2.25u and 2.75u.

    Reference: https://cdn.sparkfun.com/datasheets/Components/Switches/MX%20Series.pdf
    """
    logging.debug("stabilizer_cutout()")
    web_thickness = params.web_thickness
    cut_z = params.plate_thickness - (web_thickness / 2)
    tab_hole_thickness = retention_tab_hole_thickness(params)
    switch_height = params.keyswitch_height + params.plate_2u_keyswitch_height_offset

    main_height = inches_to_mm(0.484)
    main_width = inches_to_mm(0.262)
    main = engine.box(main_height, main_width, web_thickness)
    main = engine.translate(main, (main_height - inches_to_mm(0.26) - (main_height / 2), spacing / 2, cut_z))

    secondary_height = inches_to_mm(0.26) + (inches_to_mm(0.53) - main_height)
    secondary = engine.box(secondary_height, inches_to_mm(0.12), web_thickness)
    secondary = engine.translate(secondary, (-secondary_height / 2, spacing / 2, cut_z))

    side = engine.box(2.8, spacing + (0.8 * 2) + main_width, web_thickness)
    side = engine.translate(side, (0.9, 0, cut_z))

    connector_height = 10.7
    connector = engine.box(connector_height, spacing, web_thickness)
    connector = engine.translate(connector, ((connector_height / 2) - 5.97, 0, cut_z))

    bar_height = (params.mount_width + 3) / 2
    bar_clearance = engine.box(bar_height, spacing + main_width, web_thickness)
    bar_clearance = engine.translate(bar_clearance, (-bar_height / 2, 0, (tab_hole_thickness / 2) - 0.5))

    tab_depth = (params.mount_width - switch_height) / 2
    main_tab = engine.box(tab_depth, spacing - main_width, params.plate_thickness - tab_hole_thickness)
    main_tab = engine.translate(main_tab, (-(switch_height + tab_depth) / 2, 0, web_thickness - (tab_hole_thickness / 2)))

    retention_tab = engine.box(3.2, 3, tab_hole_thickness)
    retention_tab = engine.translate(retention_tab, (5.53, spacing / 2, (tab_hole_thickness / 2) - 0.5))

    cutout = engine.union([
        main,
        secondary,
        side,
        connector,
        engine.difference(bar_clearance, [main_tab]),
        retention_tab,
    ])
    return engine.union([cutout, engine.mirror(cutout, Y_NORMAL)])
