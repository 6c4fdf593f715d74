# flake8: noqa

from .activation import (
    Activation,
    algebraic_sigmoid,
    get_activation,
    identity,
    logistic,
    make_activation,
    PROVIDED_ACTIVATIONS,
    tanh,
)
