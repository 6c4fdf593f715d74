import logging
import os


DEFAULT_LOG_FILENAME = 'nnfit-log.txt'

LINE_FORMAT = ("[%(asctime)s] [%(name)s:%(lineno)d] "
               "%(levelname)-8s %(message)s")
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(filename=None, level=logging.DEBUG, stdout=False):
    """ Sets up logging formatting and handlers for the package loggers

    Parameters
    ----------
    filename: str, default=None
        The log file to write to. The default of None uses
        :code:`DEFAULT_LOG_FILENAME` in the current directory. A stale file
        of the same name is removed first.

    level: int, default=logging.DEBUG
        The level set on the root logger.

    stdout: bool, default=False
        If True, records are also echoed to a stream handler.

    Returns
    -------
    handlers: list of logging.Handler
        The handlers that were attached to the root logger, so that callers
        may detach them again.

    """
    filename = filename or os.path.join(os.path.curdir, DEFAULT_LOG_FILENAME)

    if os.path.exists(filename):
        os.remove(filename)

    formatter = logging.Formatter(fmt=LINE_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.FileHandler(filename, mode='w')]

    if stdout:
        handlers.append(logging.StreamHandler())

    root = logging.getLogger()
    root.setLevel(level)

    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    return handlers


def teardown_logging(handlers):
    """ Detach and close handlers returned by :func:`setup_logging`
    """
    root = logging.getLogger()

    for handler in handlers:
        root.removeHandler(handler)
        handler.close()
