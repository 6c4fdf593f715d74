"""
A single hidden layer network for approximating a scalar function.

Input (R) => Hidden (R^h) => Output (R)

Each hidden unit computes `output_weight * phi(input_weight * x + bias)`
and the network output is the plain sum of the unit outputs (no output
bias). Training is full-batch gradient descent on half the summed squared
error; every sample's output is recomputed before any unit is updated.
"""
from collections import namedtuple
import logging
import numbers

import numpy

from .exception import (
    NetworkNotConfigured, NetworkNotInitialized, TrainingDiverged)
from .sample_table import SampleTable
from .unit import Unit
from nnfit.activation.activation import Activation, make_activation
from nnfit.util.random_state import check_random_state, uniform_draw


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)


DEFAULT_LEARNING_RATE = 0.001
DEFAULT_UNIT_COUNT = 1
DEFAULT_MAX_ITERATIONS = 500
DEFAULT_MAX_ERROR = 0.01
DEFAULT_WEIGHT_RANGE = (0.0, 1.0)
DEFAULT_LOG_EVERY = 100

MIN_ITERATIONS = 1
MAX_ITERATIONS = 50000


WeightRange = namedtuple('WeightRange', ['min', 'max'])


def squared_error(table):
    """ Half the sum of squared differences between the expected and the
    actual outputs of `table`
    """
    error = 0.0
    for sample in table:
        diff = sample.expected_output - sample.actual_output
        error += diff * diff
    return error / 2.0


class Network(object):
    """ A trainable network of independent hidden units with a summed output

    Parameters are validated as they are assigned, either through the
    constructor or the `set_*` methods, so that a bad configuration is
    reported to the caller immediately rather than at training time.
    """
    def __init__(self,
                 neural_function=None,
                 derived_function=None,
                 learning_rate=DEFAULT_LEARNING_RATE,
                 unit_count=DEFAULT_UNIT_COUNT,
                 max_iterations=DEFAULT_MAX_ITERATIONS,
                 max_error=DEFAULT_MAX_ERROR,
                 output_weight_range=DEFAULT_WEIGHT_RANGE,
                 input_weight_range=DEFAULT_WEIGHT_RANGE,
                 bias_range=DEFAULT_WEIGHT_RANGE,
                 random_state=None,
                 log_every=DEFAULT_LOG_EVERY):
        """
        Parameters
        ----------
        neural_function, derived_function: callable, default=None
            The activation function of the hidden units and its
            derivative. Both may be given later through
            :meth:`set_network_functions`, but must be given together here.

        learning_rate: float, default=0.001
            Gradient descent step size. Must be positive.

        unit_count: int, default=1
            Number of hidden units. Must be positive.

        max_iterations: int, default=500
            Cap on training iterations; clamped into [1, 50000].

        max_error: float, default=0.01
            Training stops once the error drops to this value or below.
            Must be non-negative.

        output_weight_range, input_weight_range, bias_range: 2-tuple
            `(min, max)` intervals from which the starting parameters are
            drawn. Each requires `min <= max`.

        random_state: numpy.random.RandomState, default=None
            Used by :meth:`initialize_network` when it isn't given one.

        log_every: int, default=100
            Training progress is logged at debug level every `log_every`
            iterations.
        """
        self.units = []
        self.data = None
        self.neural_function = None
        self.derived_function = None

        self._last_error = 0.0
        self.iteration = 0
        self.error_history = []

        if neural_function is not None or derived_function is not None:
            self.set_network_functions(neural_function, derived_function)

        self.set_learning_constant(learning_rate)
        self.set_neuron_count(unit_count)
        self.set_max_iterations(max_iterations)
        self.set_max_error(max_error)
        self.set_weight_and_bias_ranges(
            output_weight_range, input_weight_range, bias_range)

        if random_state is not None:
            random_state = check_random_state(random_state)
        self.random_state = random_state

        if not isinstance(log_every, numbers.Integral) or log_every < 1:
            msg = "`log_every` ({}) must be a positive integer"
            raise ValueError(msg.format(log_every))
        self.log_every = log_every

    def __repr__(self):
        return "<Network unit_count={:d}, learning_rate={}>".format(
            self.unit_count, self.learning_rate)

    @property
    def last_error(self):
        """ Half the summed squared error of the last training iteration
        """
        return self._last_error

    @property
    def is_initialized(self):
        return len(self.units) > 0

    ###############################################
    # Data

    def get_data(self):
        """ Returns the owned :class:`SampleTable` (live, not a copy)
        """
        return self.data

    def set_data(self, data):
        """ Store a private deep copy of `data`

        Parameters
        ----------
        data: SampleTable, or iterable of samples, pairs or triples

        """
        if data is None:
            raise ValueError("`data` is None")

        self.data = SampleTable(data)

    def add_data(self, sample):
        if self.data is None:
            self.data = SampleTable(0)
        return self.data.add_data(sample)

    def remove_data(self, item):
        if self.data is None:
            return False
        return self.data.remove_data(item)

    ###############################################
    # Activation

    @property
    def activation(self):
        """ The shared :class:`Activation`, or None until both the function
        and its derivative are set
        """
        if self.neural_function is None or self.derived_function is None:
            return None
        return Activation(function=self.neural_function,
                          derivative=self.derived_function)

    def set_network_functions(self, neural_function, derived_function):
        activation = make_activation(neural_function, derived_function)
        self.neural_function = activation.function
        self.derived_function = activation.derivative

    def set_neural_function(self, neural_function):
        if not callable(neural_function):
            msg = "`neural_function` ({}) is not callable"
            raise TypeError(msg.format(neural_function))

        self.neural_function = neural_function

    def set_derived_function(self, derived_function):
        if not callable(derived_function):
            msg = "`derived_function` ({}) is not callable"
            raise TypeError(msg.format(derived_function))

        self.derived_function = derived_function

    ###############################################
    # Hyperparameters

    def set_learning_constant(self, learning_rate):
        try:
            learning_rate = float(learning_rate)
        except (ValueError, TypeError):
            msg = "`learning_rate` ({}) must be numeric"
            raise ValueError(msg.format(learning_rate))

        if not numpy.isfinite(learning_rate):
            msg = "`learning_rate` ({}) must be finite"
            raise ValueError(msg.format(learning_rate))

        if learning_rate <= 0:
            msg = "`learning_rate` ({}) is less than or equal to 0"
            raise ValueError(msg.format(learning_rate))

        self.learning_rate = learning_rate

    def set_neuron_count(self, unit_count):
        if (not isinstance(unit_count, numbers.Integral) or
                isinstance(unit_count, bool)):
            msg = "`unit_count` ({}) must be an integer"
            raise ValueError(msg.format(unit_count))

        if unit_count <= 0:
            msg = "`unit_count` ({}) is less than or equal to 0"
            raise ValueError(msg.format(unit_count))

        self.unit_count = int(unit_count)

    def get_max_iterations(self):
        return self.max_iterations

    def set_max_iterations(self, max_iterations):
        """ Set the iteration cap. Out-of-range values are clamped into
        [MIN_ITERATIONS, MAX_ITERATIONS] rather than rejected.
        """
        try:
            value = float(max_iterations)
        except (ValueError, TypeError):
            msg = "`max_iterations` ({}) must be numeric"
            raise ValueError(msg.format(max_iterations))

        if numpy.isnan(value):
            msg = "`max_iterations` ({}) is not a number"
            raise ValueError(msg.format(max_iterations))

        clamped = int(min(max(value, MIN_ITERATIONS), MAX_ITERATIONS))

        if clamped != max_iterations:
            msg = "`max_iterations` ({}) clamped to {:d}"
            logger.debug(msg.format(max_iterations, clamped))

        self.max_iterations = clamped

    def set_max_error(self, max_error):
        try:
            max_error = float(max_error)
        except (ValueError, TypeError):
            msg = "`max_error` ({}) must be numeric"
            raise ValueError(msg.format(max_error))

        if not numpy.isfinite(max_error):
            msg = "`max_error` ({}) must be finite"
            raise ValueError(msg.format(max_error))

        if max_error < 0:
            msg = "`max_error` ({}) is less than 0"
            raise ValueError(msg.format(max_error))

        self.max_error = max_error

    def set_output_weight_range(self, output_weight_range):
        self.output_weight_range = _validate_range(
            output_weight_range, 'output_weight_range')

    def set_input_weight_range(self, input_weight_range):
        self.input_weight_range = _validate_range(
            input_weight_range, 'input_weight_range')

    def set_bias_range(self, bias_range):
        self.bias_range = _validate_range(bias_range, 'bias_range')

    def set_weight_and_bias_ranges(self, output_weight_range,
                                   input_weight_range, bias_range):
        self.set_output_weight_range(output_weight_range)
        self.set_input_weight_range(input_weight_range)
        self.set_bias_range(bias_range)

    ###############################################
    # Training

    def _draw_params(self, random_state):
        return (
            uniform_draw(random_state, *self.output_weight_range),
            uniform_draw(random_state, *self.input_weight_range),
            uniform_draw(random_state, *self.bias_range),
        )

    def initialize_network(self, random_state=None, independent_units=False):
        """ Create `unit_count` fresh units with random starting parameters

        Parameters
        ----------
        random_state: numpy.random.RandomState, default=None
            Provide for reproducible results. Defaults to the random state
            given at construction, or else an unseeded one.

        independent_units: bool, default=False
            By default a single `(output_weight, input_weight, bias)` triple
            is drawn and shared by every unit. Since all units then see the
            same gradients, they stay identical through training. If True, a
            separate triple is drawn for each unit.

        """
        if random_state is None:
            random_state = self.random_state
        random_state = check_random_state(random_state)

        if independent_units:
            self.units = [Unit(*self._draw_params(random_state))
                          for _ in range(self.unit_count)]
        else:
            params = self._draw_params(random_state)
            self.units = [Unit(*params) for _ in range(self.unit_count)]

        self.iteration = 0
        self.error_history = []

        msg = "Initialized {:d} unit(s); first unit starts at {}"
        logger.info(msg.format(self.unit_count, self.units[0].get_params()))

    def predict(self, x):
        """ Returns the network output (the sum of the unit outputs) at `x`
        """
        if self.activation is None:
            raise NetworkNotConfigured("Activation functions not set")

        if not self.is_initialized:
            raise NetworkNotInitialized("Call `initialize_network` first")

        activation = self.activation
        return sum(unit.get_output(x, activation) for unit in self.units)

    def _check_can_run(self):
        if self.activation is None:
            raise NetworkNotConfigured("Activation functions not set")

        if self.data is None or len(self.data) == 0:
            raise NetworkNotConfigured("No training data set")

        if not self.is_initialized:
            raise NetworkNotInitialized("Call `initialize_network` first")

    def _log_with_iter(self, msg, level=logging.INFO):
        """ Log `msg` tagged with the current iteration number """
        msg = "(Iteration = {:05d}) {}".format(self.iteration, msg)
        logger.log(level, msg)

    def _forward(self, activation):
        for sample in self.data:
            sample.actual_output = sum(
                unit.get_output(sample.input, activation)
                for unit in self.units)

    def run_neural_network(self):
        """ Train until the error drops to `max_error` or `max_iterations`
        iterations have run

        Each iteration computes the outputs for every sample, then updates
        every unit from those outputs, then records the error. The recorded
        error therefore belongs to the parameters from before that
        iteration's update.

        Returns
        -------
        last_error: float
            The error of the final iteration.

        """
        self._check_can_run()
        activation = self.activation

        self.iteration = 0
        self.error_history = []

        for _ in range(self.max_iterations):
            self.iteration += 1

            self._forward(activation)

            for unit in self.units:
                unit.update_weights(
                    self.data, self.learning_rate, activation)

            self._last_error = squared_error(self.data)
            self.error_history.append(self._last_error)

            if not numpy.isfinite(self._last_error):
                msg = ("Non-finite error encountered; try a smaller "
                       "learning rate (currently {})")
                msg = msg.format(self.learning_rate)
                self._log_with_iter(msg, level=logging.ERROR)
                raise TrainingDiverged(msg)

            if self.iteration % self.log_every == 0:
                msg = "Error = {:.7f}".format(self._last_error)
                self._log_with_iter(msg, level=logging.DEBUG)

            if self._last_error <= self.max_error:
                msg = "Error {:.7f} reached max error {:.7f}"
                self._log_with_iter(
                    msg.format(self._last_error, self.max_error))
                break
        else:
            msg = "Stopped at iteration cap with error {:.7f}"
            self._log_with_iter(msg.format(self._last_error))

        return self._last_error


def _validate_range(value, name):
    try:
        low, high = value
        low, high = float(low), float(high)
    except (ValueError, TypeError):
        msg = "`{}` ({}) must be a (min, max) pair of numbers"
        raise ValueError(msg.format(name, value))

    if not (numpy.isfinite(low) and numpy.isfinite(high)):
        msg = "`{}` bounds ({}, {}) must be finite"
        raise ValueError(msg.format(name, low, high))

    if low > high:
        msg = "`{}` min ({}) is greater than max ({})"
        raise ValueError(msg.format(name, low, high))

    return WeightRange(min=low, max=high)
