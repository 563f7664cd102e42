import dataclasses
import json
import logging
import math
import pathlib
from collections.abc import Mapping
from typing import Optional, Tuple

from .errors import ConfigurationError
from .generate_configuration import shape_config

Vector3 = Tuple[float, float, float]

COLUMN_STYLES = ("standard", "orthographic", "fixed")

# Keys in the configuration that control the run rather than the shape.
RUN_KEYS = frozenset(("ENGINE", "config_name", "save_dir"))


def default_column_offsets(ncols: int, inner_column: bool) -> Tuple[Vector3, ...]:
    """
    Stagger of each column relative to the curvature model, in millimeters.
    """
    offsets = []
    for column in range(ncols):
        if inner_column:
            if column <= 1:
                offset = (0, -2, 0)
            elif column == 3:
                offset = (0, 2.82, -4.5)
            elif column >= 5:
                offset = (0, -12, 5.64)
            else:
                offset = (0, 0, 0)
        else:
            if column == 2:
                offset = (0, 2.82, -4.5)
            elif column >= 4:
                offset = (0, -12, 5.64)
            else:
                offset = (0, 0, 0)
        offsets.append(offset)
    return tuple(offsets)


def _freeze(value):
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


@dataclasses.dataclass(frozen=True)
class ShapeParameters:
    """
    Immutable shape configuration.

    Every piece of geometry is a pure function of one of these; it is built
    once, from the default configuration merged with an optional JSON file,
    and threaded explicitly through the generator.
    Angles are in radians, lengths in millimeters.
    """

    nrows: int = shape_config['nrows']
    ncols: int = shape_config['ncols']
    alpha: float = shape_config['alpha']
    beta: float = shape_config['beta']
    centercol: int = shape_config['centercol']
    centerrow_offset: int = shape_config['centerrow_offset']
    tenting_angle: float = shape_config['tenting_angle']

    pinky_15u: bool = shape_config['pinky_15u']
    first_15u_row: int = shape_config['first_15u_row']
    last_15u_row: int = shape_config['last_15u_row']
    extra_row: bool = shape_config['extra_row']
    inner_column: bool = shape_config['inner_column']

    column_style: str = shape_config['column_style']
    column_offsets: Optional[Tuple[Vector3, ...]] = None
    thumb_offsets: Vector3 = _freeze(shape_config['thumb_offsets'])
    keyboard_z_offset: float = shape_config['keyboard_z_offset']

    extra_width: float = shape_config['extra_width']
    extra_height: float = shape_config['extra_height']

    wall_z_offset: float = shape_config['wall_z_offset']
    wall_xy_offset: float = shape_config['wall_xy_offset']
    wall_thickness: float = shape_config['wall_thickness']

    fixed_angles: Tuple[float, ...] = _freeze(shape_config['fixed_angles'])
    fixed_x: Tuple[float, ...] = _freeze(shape_config['fixed_x'])
    fixed_z: Tuple[float, ...] = _freeze(shape_config['fixed_z'])
    fixed_tenting: float = shape_config['fixed_tenting']

    create_side_nubs: bool = shape_config['create_side_nubs']
    keyswitch_height: float = shape_config['keyswitch_height']
    keyswitch_width: float = shape_config['keyswitch_width']
    sa_profile_key_height: float = shape_config['sa_profile_key_height']
    sa_length: float = shape_config['sa_length']
    sa_double_length: float = shape_config['sa_double_length']
    plate_thickness: float = shape_config['plate_thickness']
    side_nub_thickness: float = shape_config['side_nub_thickness']
    retention_tab_thickness: float = shape_config['retention_tab_thickness']
    plate_2u_keyswitch_height_offset: float = shape_config['plate_2u_keyswitch_height_offset']

    web_thickness: float = shape_config['web_thickness']
    post_size: float = shape_config['post_size']

    left_wall_x_offset: float = shape_config['left_wall_x_offset']
    left_wall_z_offset: float = shape_config['left_wall_z_offset']

    screw_insert_height: float = shape_config['screw_insert_height']
    screw_insert_bottom_radius: float = shape_config['screw_insert_bottom_radius']
    screw_insert_top_radius: float = shape_config['screw_insert_top_radius']
    screw_insert_wall: float = shape_config['screw_insert_wall']

    control_switch_radius: float = shape_config['control_switch_radius']

    base_thickness: float = shape_config['base_thickness']
    palm_rest_length: float = shape_config['palm_rest_length']

    def __post_init__(self):
        if self.column_style not in COLUMN_STYLES:
            raise ConfigurationError(
                "curvature model: unknown column_style {!r}, expected one of {}".format(self.column_style, COLUMN_STYLES)
            )
        if self.nrows < 3:
            raise ConfigurationError("matrix layout: nrows must be at least 3, got {}".format(self.nrows))
        for field in dataclasses.fields(self):
            object.__setattr__(self, field.name, _freeze(getattr(self, field.name)))
        if self.column_offsets is None:
            object.__setattr__(self, 'column_offsets', default_column_offsets(self.ncols, self.inner_column))

    @classmethod
    def from_config(cls, config: Mapping) -> "ShapeParameters":
        """
        Build parameters from a configuration mapping, ignoring run keys.
        """
        field_names = {field.name for field in dataclasses.fields(cls)}
        unknown = set(config) - field_names - RUN_KEYS
        if unknown:
            raise ConfigurationError("configuration: unknown keys {}".format(sorted(unknown)))

        values = {key: _freeze(value) for key, value in config.items() if key in field_names}
        return cls(**values)

    @classmethod
    def load(cls, path: Optional[pathlib.Path] = None) -> "ShapeParameters":
        return cls.from_config(load_config(path))

    ####################
    ## Derived values ##
    ####################

    @property
    def lastrow(self) -> int:
        return self.nrows - 1

    @property
    def cornerrow(self) -> int:
        return self.lastrow - 1

    @property
    def lastcol(self) -> int:
        return self.ncols - 1

    @property
    def extra_cornerrow(self) -> int:
        return self.lastrow if self.extra_row else self.cornerrow

    @property
    def innercol_offset(self) -> int:
        return 1 if self.inner_column else 0

    @property
    def centerrow(self) -> int:
        return self.nrows - self.centerrow_offset

    @property
    def mount_width(self) -> float:
        return self.keyswitch_width + 3.2

    @property
    def mount_height(self) -> float:
        return self.keyswitch_height + 2.7

    @property
    def cap_top_height(self) -> float:
        return self.plate_thickness + self.sa_profile_key_height

    @property
    def row_radius(self) -> float:
        return ((self.mount_height + self.extra_height) / 2) / math.sin(self.alpha / 2) + self.cap_top_height

    @property
    def column_radius(self) -> float:
        return ((self.mount_width + self.extra_width) / 2) / math.sin(self.beta / 2) + self.cap_top_height

    @property
    def column_x_delta(self) -> float:
        return -1 - self.column_radius * math.sin(self.beta)

    @property
    def post_adj(self) -> float:
        return self.post_size / 2

    def column_offset(self, column: int) -> Vector3:
        if not 0 <= column < len(self.column_offsets):
            raise ConfigurationError(
                "curvature model: no column offset for column {} ({} declared)".format(column, len(self.column_offsets))
            )
        return self.column_offsets[column]


def load_config(path: Optional[pathlib.Path] = None) -> dict:
    """
    The default configuration, overridden by the JSON file at path.
    """
    config = dict(shape_config)
    if path is None:
        logging.info("NO CONFIGURATION SPECIFIED, USING DEFAULT CONFIGURATION")
    else:
        logging.info("Loading configuration from %s", path)
        with open(path, mode="rt", encoding="utf-8") as fid:
            config.update(json.load(fid))
    return config
