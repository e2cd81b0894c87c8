from src.utils.config import VARTYPE, NUM_VARIABLES, DTYPE, DEFAULT_DTYPE, OFFSET, LINEAR, DENSE, COO, ROWS, COLS, BIASES
from .exceptions import BqmError, InteractionNotFound, InvalidArgument, LogicError, InconsistentModelError
from .Vartype import Vartype
from .Neighborhood import Neighborhood
from .QuadraticModelBase import QuadraticModelBase
from .BinaryQuadraticModel import BinaryQuadraticModel

import logging

import numpy as np


def model_from_config(config: dict) -> BinaryQuadraticModel:
    """
    Builds a BinaryQuadraticModel from a config dict, e.g. one loaded from a
    JSON file. dense is a square nested list. The dense and coo blocks are
    added after the linear biases, the offset is added last.
    """
    logger: logging.Logger = logging.getLogger(__package__)
    vartype = Vartype.from_str(config.get(VARTYPE, "binary"))
    dtype = np.dtype(config.get(DTYPE, DEFAULT_DTYPE))
    bqm = BinaryQuadraticModel(vartype, config.get(NUM_VARIABLES, 0), dtype)

    linear = config.get(LINEAR)
    if linear is not None:
        if len(linear) > bqm.num_variables:
            bqm.resize(len(linear))
        for v, bias in enumerate(linear):
            bqm.add_linear(v, bias)

    dense = config.get(DENSE)
    if dense is not None:
        bqm.add_quadratic_dense(dense, len(dense))

    coo = config.get(COO)
    if coo is not None:
        bqm.add_quadratic_coo(coo[ROWS], coo[COLS], coo[BIASES])

    bqm.offset = bqm.offset + config.get(OFFSET, 0)
    logger.info("model from config vartype=%s num_variables=%d num_interactions=%d",
                bqm.vartype,
                bqm.num_variables,
                bqm.num_interactions)
    return bqm
