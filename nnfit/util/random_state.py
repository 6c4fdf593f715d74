import logging

import numpy


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)


def check_random_state(random_state):
    """ Validate a random source, creating an unseeded one if necessary

    Parameters
    ----------
    random_state: numpy.random.RandomState or None
        Provide for reproducible results. None creates a fresh, unseeded
        RandomState and logs a warning.

    Returns
    -------
    random_state: numpy.random.RandomState

    """
    if random_state is None:
        random_state = numpy.random.RandomState()
        msg = ("RandomState not provided; results will "
               "not be reproducible")
        logger.warning(msg)
    elif not isinstance(random_state, numpy.random.RandomState):
        msg = "`random_state` ({}) not instance numpy.random.RandomState"
        raise TypeError(msg.format(type(random_state)))

    return random_state


def uniform_draw(random_state, low, high):
    """ Draw a value from the half-open interval [low, high)

    The draw is `high * v + low * (1 - v)` for `v` uniform on [0, 1), so a
    degenerate interval (low == high) gives back `low` up to rounding.
    """
    value = random_state.random_sample()
    return high * value + low * (1.0 - value)
