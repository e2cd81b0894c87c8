import logging
import sys

import numpy as np

from typing import List, Tuple

LOGGER_INITIALIZED: bool = False

FORMAT_STR = "%(asctime)s %(levelname)s %(name)s.%(filename)s::%(funcName)s %(message)s"


def initialize_logger(filename: str = '',
                      level: int = logging.DEBUG):
    global LOGGER_INITIALIZED
    if not LOGGER_INITIALIZED:
        if filename != '':
            logging.basicConfig(filename=filename, format=FORMAT_STR, level=level)
        else:
            logging.basicConfig(stream=sys.stdout, format=FORMAT_STR, level=level)
        LOGGER_INITIALIZED = True


def is_sorted(keys: List[int]) -> bool:
    return all(keys[i] <= keys[i + 1] for i in range(len(keys) - 1))


def zip_sort(keys: List[int], values: List) -> Tuple[List[int], List]:
    """
    Stable sort of two parallel lists, ordered by keys. Entries with equal keys
    keep their relative order. New lists are returned; the inputs are not
    modified.
    :param keys:
    :param values:
    :return: (sorted_keys, sorted_values)
    """
    assert len(keys) == len(values)
    order = np.argsort(np.asarray(keys, dtype=np.int64), kind='stable')
    sorted_keys: List[int] = [keys[i] for i in order]
    sorted_values: List = [values[i] for i in order]
    return sorted_keys, sorted_values
