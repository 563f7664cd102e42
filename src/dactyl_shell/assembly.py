"""
Case shell and base plate assembly.
"""
import logging

from .connectors import connectors
from .engines.engine import GeometryEngine
from .hardware import ControlSwitches, NiceNanoHolder, PalmRest, ScrewInserts
from .layout import key_holes, key_holes_inner
from .mesh import union_all
from .parameters import ShapeParameters
from .plates import stabilizer_cutout
from .predicates import log_degraded_toggles
from .thumb import thumb, thumb_connectors, thumb_stabilizer_cutouts
from .walls import case_walls

# everything below z=0 is cut away with this slab
FLOOR_CUT = (350, 350, 40)
MIRROR_NORMAL = (1, 0, 0)


def case_shell(params: ShapeParameters, engine: GeometryEngine):
    """
    Walls with the screw inserts and USB retainer, minus the holes through them.
    """
    logging.debug("case_shell()")
    inserts = ScrewInserts(params, engine)
    holder = NiceNanoHolder(params, engine)

    shell = engine.union([case_walls(params, engine), inserts.outers(), holder.usb_retainer()])
    return engine.difference(shell, [
        ControlSwitches(params, engine).holes(),
        inserts.holes(),
        holder.usb_cutout(),
    ])


def model_right(params: ShapeParameters, engine: GeometryEngine):
    logging.info("Building right case")
    log_degraded_toggles(params)

    shape = union_all([
        key_holes(params, engine),
        key_holes_inner(params, engine),
        connectors(params, engine),
        thumb(params, engine),
        thumb_connectors(params, engine),
        case_shell(params, engine),
    ], engine)

    # the stabilizer bar clearance reaches past the mount, so it is cut from the finished case
    shape = engine.difference(shape, [thumb_stabilizer_cutouts(stabilizer_cutout(params, engine), params, engine)])

    floor = engine.translate(engine.box(*FLOOR_CUT), (0, 0, -FLOOR_CUT[2] / 2))
    return engine.difference(shape, [floor])


def plate_right(params: ShapeParameters, engine: GeometryEngine):
    """
    The base plate: the case footprint and palm rest, with countersunk screw
    holes and the controller holder standing on top.
    """
    logging.info("Building right plate")
    log_degraded_toggles(params)

    thickness = params.base_thickness
    inserts = ScrewInserts(params, engine)
    palm_rest = PalmRest(params, engine)

    footprint = engine.project(engine.union([case_walls(params, engine), inserts.outers()]))
    plate = engine.union([engine.extrude(footprint, thickness), palm_rest.rest()])
    plate = engine.difference(plate, [*inserts.plate_holes(thickness), *palm_rest.screw_holes()])

    holder = engine.translate(NiceNanoHolder(params, engine).holder(), (0, 0, thickness))
    return engine.union([plate, holder])


def mirror_to_left(shape, engine: GeometryEngine):
    return engine.mirror(shape, MIRROR_NORMAL)
