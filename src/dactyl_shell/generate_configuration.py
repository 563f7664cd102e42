import argparse
import json
import logging
import math
import pathlib
from typing import Optional

shape_config = {

    'ENGINE': 'cadquery',  # only 'cadquery' is supported

    ######################
    ## Shape parameters ##
    ######################

    'nrows': 5,  # key rows
    'ncols': 7,  # key columns, including the inner column

    'alpha': math.pi / 12.0,  # curvature of the columns
    'beta': math.pi / 36.0,  # curvature of the rows
    'centercol': 4,  # controls left_right tilt / tenting (higher number is more tenting)
    'centerrow_offset': 3,  # rows from max, controls front_back tilt
    'tenting_angle': math.pi / 12.0,  # or, change this for more precise tenting control

    'pinky_15u': True,  # outer column uses 1.5u keys
    'first_15u_row': 0,  # first row with a 1.5u key on the outer column
    'last_15u_row': 3,  # last row with a 1.5u key on the outer column

    'extra_row': False,  # adds an extra bottom row to the outer columns
    'inner_column': True,  # adds an extra inner column (two less rows than nrows)

    'column_style': 'standard',  # 'standard', 'orthographic' or 'fixed'

    # per column [x, y, z]; null derives the offsets from inner_column
    'column_offsets': None,

    'thumb_offsets': [6, -3, 7],
    'keyboard_z_offset': 10,  # controls overall height

    'extra_width': 2.5,  # extra space between the base of keys
    'extra_height': 1.0,

    'wall_z_offset': -2,  # length of the first downward_sloping part of the wall
    'wall_xy_offset': 0.5,  # x and/or y offset for the first downward_sloping part of the wall
    'wall_thickness': 2,

    # Settings for column_style == 'fixed'
    # The defaults roughly match Maltron settings
    # http://patentimages.storage.googleapis.com/EP0219944A2/imgf0002.png
    # fixed_z overrides the z portion of the column offsets above.
    'fixed_angles': [math.radians(10), math.radians(10), 0, 0, 0, math.radians(-15), math.radians(-15)],
    'fixed_x': [-41.5, -22.5, 0, 20.3, 41.4, 65.5, 89.6],  # relative to the middle finger
    'fixed_z': [12.1, 8.3, 0, 5, 10.7, 14.5, 17.5],
    'fixed_tenting': 0.0,

    ##################
    ## Switch plate ##
    ##################

    'create_side_nubs': True,  # Cherry MX / Gateron; disable for Kailh
    'keyswitch_height': 14.15,
    'keyswitch_width': 14.15,
    'sa_profile_key_height': 12.7,
    'sa_length': 18.25,
    'sa_double_length': 37.5,
    'plate_thickness': 4,
    'side_nub_thickness': 4,
    'retention_tab_thickness': 1.5,
    'plate_2u_keyswitch_height_offset': -0.2,

    'web_thickness': 4.5,
    'post_size': 0.1,

    ##########
    ## Case ##
    ##########

    'left_wall_x_offset': 0,
    'left_wall_z_offset': 0.5,

    # Hole Depth Y: 4.4
    'screw_insert_height': 6,
    # Hole Diameter C: 4.1-4.4
    'screw_insert_bottom_radius': 4.0 / 2,
    'screw_insert_top_radius': 3.9 / 2,
    # Wall Thickness W: 1.65
    'screw_insert_wall': 1.65,

    'control_switch_radius': 6.1,

    'base_thickness': 2.6,
    'palm_rest_length': 63.5,

    'config_name': 'DM',
    'save_dir': '.',
}


class GenerateConfigAction(argparse.Action):
    """
    Write the default configuration to the given path and exit
    """

    def __init__(self, option_strings, dest: str, **kwargs):
        kwargs.update({
            'type': pathlib.Path,
            'metavar': 'PATH',
            'help': "Write the default configuration to PATH and exit.",
        })
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser: argparse.ArgumentParser, _namespace: argparse.Namespace, values: pathlib.Path, _option_string: Optional[str] = None):
        write_config(values)
        parser.exit()


def write_config(path: pathlib.Path, config: Optional[dict] = None):
    logging.info("Writing configuration to %s", path)
    with open(path, mode="wt", encoding="utf-8") as fid:
        json.dump(shape_config if config is None else config, fid, indent=4)
