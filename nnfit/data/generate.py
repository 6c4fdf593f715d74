import logging

import numpy
from scipy.stats import uniform

from nnfit.core.sample_table import Sample, SampleTable
from nnfit.util.random_state import check_random_state


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)


def evenly_spaced_table(count, expected_function=numpy.sin,
                        start=0.0, stop=1.0, decimals=3):
    """
    Make a table of `count + 1` evenly spaced samples of a target function.

    Parameters
    ----------
    count: int
        The number of intervals between `start` and `stop`. Both end points
        are included, so the table has `count + 1` samples.

    expected_function: callable, default=numpy.sin
        The target function giving the expected output of each input.

    start, stop: float, default=0, 1
        The interval over which inputs are placed.

    decimals: int, default=3
        Inputs are rounded to this many decimal places before the target
        function is evaluated.

    Returns
    -------
    table: SampleTable
    """
    if count < 1:
        msg = "`count` ({}) must be at least 1"
        raise ValueError(msg.format(count))

    if not callable(expected_function):
        msg = "`expected_function` ({}) is not callable"
        raise TypeError(msg.format(expected_function))

    step = (stop - start) / count
    table = SampleTable(count + 1)

    for i, sample in enumerate(table):
        sample.input = round(start + i * step, decimals)
        sample.expected_output = float(expected_function(sample.input))

    return table


def random_table(count, expected_function=numpy.sin, low=0.0, high=1.0,
                 noise=0.0, random_state=None):
    """
    Make a table of samples with inputs drawn uniformly from [low, high].

    Parameters
    ----------
    count: int
        The number of samples.

    expected_function: callable, default=numpy.sin
        The target function giving the expected output of each input.

    low, high: float, default=0, 1
        The interval from which inputs are drawn.

    noise: float, default=0
        Standard deviation of Gaussian noise added to the expected outputs.

    random_state: numpy.random.RandomState, default=None
        Include for reproducible results.

    Returns
    -------
    table: SampleTable
        The samples, sorted by input.
    """
    if count < 0:
        msg = "`count` ({}) is less than 0"
        raise ValueError(msg.format(count))

    if high < low:
        msg = "`low` ({}) is greater than `high` ({})"
        raise ValueError(msg.format(low, high))

    if noise < 0:
        msg = "`noise` ({}) is less than 0"
        raise ValueError(msg.format(noise))

    random_state = check_random_state(random_state)

    inputs = numpy.sort(uniform.rvs(
        loc=low, scale=high - low, size=count, random_state=random_state))
    expected = numpy.array([expected_function(x) for x in inputs],
                           dtype=float)

    if noise > 0:
        expected += noise * random_state.randn(count)

    logger.info("Created random table with {:d} samples".format(count))

    return SampleTable(Sample(x, y) for x, y in zip(inputs, expected))


def solve_expected(table, expected_function):
    """ Overwrite the expected output of every sample in `table` (in place)
    with `expected_function` evaluated at its input
    """
    if not callable(expected_function):
        msg = "`expected_function` ({}) is not callable"
        raise TypeError(msg.format(expected_function))

    for sample in table:
        sample.expected_output = float(expected_function(sample.input))

    return table
