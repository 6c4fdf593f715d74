from collections import namedtuple

import numpy


# The function/derivative pair shared by every unit of a network
Activation = namedtuple('Activation', ['function', 'derivative'])


def make_activation(function, derivative):
    """ Validate and bundle an activation function with its derivative

    Parameters
    ----------
    function: callable
        Maps the unit's weighted input to its activation.

    derivative: callable
        The derivative of `function`.

    Returns
    -------
    activation: Activation

    """
    if not callable(function):
        msg = "`function` ({}) is not callable"
        raise TypeError(msg.format(function))

    if not callable(derivative):
        msg = "`derivative` ({}) is not callable"
        raise TypeError(msg.format(derivative))

    return Activation(function=function, derivative=derivative)


def _identity(x):
    return x


def _identity_derivative(x):
    return numpy.ones_like(x, dtype=float)[()]


def _algebraic_sigmoid(x):
    return x / numpy.sqrt(1 + x*x)


def _algebraic_sigmoid_derivative(x):
    s = 1 + x*x
    return 1 / (s * numpy.sqrt(s))


def _tanh_derivative(x):
    t = numpy.tanh(x)
    return 1 - t*t


def _logistic(x):
    return 1 / (1 + numpy.exp(-x))


def _logistic_derivative(x):
    s = _logistic(x)
    return s * (1 - s)


identity = Activation(function=_identity, derivative=_identity_derivative)

# x / sqrt(1 + x^2); bounded like tanh but cheaper to evaluate.
algebraic_sigmoid = Activation(function=_algebraic_sigmoid,
                               derivative=_algebraic_sigmoid_derivative)

tanh = Activation(function=numpy.tanh, derivative=_tanh_derivative)

logistic = Activation(function=_logistic, derivative=_logistic_derivative)


PROVIDED_ACTIVATIONS = {
    'identity': identity,
    'algebraic_sigmoid': algebraic_sigmoid,
    'tanh': tanh,
    'logistic': logistic,
}


def get_activation(name):
    """ Look up one of the provided activations by name
    """
    try:
        return PROVIDED_ACTIVATIONS[name]
    except KeyError:
        msg = "Unknown activation `{}`; choose from {}"
        raise ValueError(msg.format(name, sorted(PROVIDED_ACTIVATIONS)))
