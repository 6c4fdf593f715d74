class NetworkNotConfigured(Exception):
    """ Raised when training is requested before the data or the activation
    functions have been provided
    """


class NetworkNotInitialized(Exception):
    """ Raised when training or prediction is requested before the units
    have been created with `initialize_network`
    """


class TrainingDiverged(Exception):
    """ Raised when a training iteration produces a non-finite error
    """
