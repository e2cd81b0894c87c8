import json
import argparse
import logging

from src.bqm import BinaryQuadraticModel, Vartype, model_from_config
from src.utils import initialize_logger

from src.utils.config import SAMPLES

from typing import Tuple


def _load_model(args) -> Tuple[BinaryQuadraticModel, dict]:
    with open(args.config_file) as f:
        config = json.load(f)
    bqm = model_from_config(config)
    if args.vartype is not None:
        bqm.change_vartype(Vartype.from_str(args.vartype))
    return bqm, config


def dump_main(args):
    initialize_logger(level=logging.WARNING)
    bqm, _ = _load_model(args)
    print(bqm, end='')


def energy_main(args):
    logger = logging.getLogger()
    initialize_logger(level=logging.INFO)
    bqm, config = _load_model(args)
    samples = config.get(SAMPLES, [])
    if not samples:
        logger.info("no samples in config_file=%s", args.config_file)
        return
    energies = bqm.energies(samples)
    for i, energy in enumerate(energies.tolist()):
        logger.info("sample=%d energy=%.6f", i, energy)


def init_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser('bqm',
                                     description='inspect binary quadratic models')
    subparsers = parser.add_subparsers(title='command',
                                       help='command to run',
                                       required=True)
    dump_parser = subparsers.add_parser('dump',
                                        help='print the model')
    dump_parser.add_argument("config_file",
                             help="configuration file")
    dump_parser.set_defaults(func=dump_main)
    energy_parser = subparsers.add_parser('energy',
                                          help='compute the energies of the samples in the config')
    energy_parser.add_argument("config_file",
                               help="configuration file")
    energy_parser.set_defaults(func=energy_main)
    for p in (dump_parser, energy_parser):
        p.add_argument("--vartype",
                       default=None,
                       help="change the vartype of the model before running the command")
    return parser


if __name__ == '__main__':
    args = init_parser().parse_args()
    args.func(args)
