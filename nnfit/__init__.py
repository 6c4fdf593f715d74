# flake8: noqa

from ._version import version as __version__

from .activation import Activation, get_activation, make_activation
from .core.exception import (
    NetworkNotConfigured, NetworkNotInitialized, TrainingDiverged)
from .core.network import Network, WeightRange
from .core.sample_table import Sample, SampleTable
from .core.unit import Unit
