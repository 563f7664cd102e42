import argparse
import logging
import os.path as path
import pathlib
from typing import Optional

from .assembly import mirror_to_left, model_right, plate_right
from .engines.engine import GeometryEngine
from .errors import ConfigurationError
from .generate_configuration import GenerateConfigAction
from .parameters import ShapeParameters, load_config


class LogLevelAction(argparse.Action):
    """
    Set the log level
    """

    log_levels = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL,
    }

    def __init__(self, option_strings, dest: str, **kwargs):
        kwargs.update({
            'default': "INFO",
            'type': str,
            'choices': self.log_levels.keys(),
            'help': "The log level to use."
        })
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, _parser: argparse.ArgumentParser, namespace: argparse.Namespace, values: str, _option_string: Optional[str] = None):
        setattr(namespace, self.dest, values)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a dactyl-manuform keyboard case.")
    parser.add_argument("--generate-config", action=GenerateConfigAction)
    parser.add_argument("--config", default=argparse.SUPPRESS, type=pathlib.Path, help="A config file to control keyboard generation.")
    parser.add_argument("--log-level", action=LogLevelAction)
    return parser


def select_engine(name: str) -> GeometryEngine:
    if name == 'cadquery':
        from .engines.cadquery_engine import CadQueryEngine
        return CadQueryEngine()
    raise ConfigurationError("configuration: unsupported ENGINE {!r}".format(name))


def output_dir(save_dir: Optional[str]) -> str:
    if save_dir in ['', None, '.']:
        return path.join(r".", "things")
    return path.join(r".", "things", save_dir)


def export_file(shape, engine: GeometryEngine, fname: str):
    for exporter in engine.exporters():
        exporter.export_geometry(shape, pathlib.Path(fname + exporter.file_type()))


def run(config: dict, params: ShapeParameters, engine: GeometryEngine):
    save_path = output_dir(config['save_dir'])
    pathlib.Path(save_path).mkdir(parents=True, exist_ok=True)
    config_name = config['config_name']

    mod_r = model_right(params, engine)
    export_file(shape=mod_r, engine=engine, fname=path.join(save_path, config_name + r"_right"))
    export_file(shape=mirror_to_left(mod_r, engine), engine=engine, fname=path.join(save_path, config_name + r"_left"))

    base = plate_right(params, engine)
    export_file(shape=base, engine=engine, fname=path.join(save_path, config_name + r"_right_plate"))


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=LogLevelAction.log_levels[args.log_level])

    config = load_config(args.config if "config" in args else None)
    params = ShapeParameters.from_config(config)

    logging.info("Using engine %s", config['ENGINE'])
    engine = select_engine(config['ENGINE'])
    run(config, params, engine)


if __name__ == '__main__':
    main()
