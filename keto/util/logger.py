"""This module defines logging capabilities for keto."""

import logging
import sys
import time

LOG_LEVELS = list(range(5))
DEFAULT_LOG_LEVEL = 3


def get_logger(name):
    """Returns a Python logger.

    Only a single handler which logs to STDOUT is added to a logger, since
    multiple calls with the same name would otherwise add duplicate handlers
    and lead to extra prints.

    Args:
        name (str): The name of the Logger.

    Returns:
        A Python Logger.
    """

    log = logging.getLogger(name)
    set_level(log, Logger.LOG_LEVEL)

    if not log.handlers:
        sh = logging.StreamHandler(sys.stdout)
        fmt = logging.Formatter("%(message)s")
        sh.setFormatter(fmt)
        log.addHandler(sh)

    return log


def set_level(logger, level):
    """Sets the logging level.

    The keto levels map to the Python levels as follows: 1 is ERROR,
    2 is WARNING, 3 is INFO, 4 is DEBUG and 0 disables the logger.

    Args:
        logger: A Python logger object.
        level (int): The logging level.

    Raises:
        ValueError if log level is unsupported.
    """

    if level not in LOG_LEVELS:
        raise ValueError(f"log level {level} is not supported")

    logger.disabled = False
    if level == 1:
        logger.setLevel(logging.ERROR)
    elif level == 2:
        logger.setLevel(logging.WARNING)
    elif level == 3:
        logger.setLevel(logging.INFO)
    elif level == 4:
        logger.setLevel(logging.DEBUG)
    else:
        logger.disabled = True


class Singleton(type):
    """Metaclass to implement the Singleton pattern.

    The metaclass keeps track of the instances it created. Calling a class
    using it again re-initialises and returns the existing instance.

    Example:
        >>> log1 = Logger(__name__)
        >>> log2 = Logger("keto")
        >>> id(log1) == id(log2)
        True
    """
    _instances = {}

    def __call__(cls, *args, **kwargs):
        if cls not in cls._instances:
            cls._instances[cls] = super(Singleton, cls).__call__(*args, **kwargs)
        else:
            cls._instances[cls].__init__(*args, **kwargs)

        return cls._instances[cls]


class Logger(metaclass=Singleton):
    """This class provides logging capabilities.

    This class is a singleton that returns a proxy instance of
    logging.Logger. Before using, set Logger.LOG_LEVEL to the desired
    level:

    .. code:: shell

        * 0 - quiet (no output)
        * 1 - error
        * 2 - warning
        * 3 - info
        * 4 - debug

    All functions except for :meth:`.Logger.question` support ``%``-style
    formatting.

    Example:
        >>> log = Logger(__name__)
        >>> log.info("hello world")
        [~] hello world
        >>> log.info("%s %s", "hello", "world")
        [~] hello world

    Attributes:
        LOG_LEVEL (int): The log level to be used across the application.

    Args:
        name (str): The name of the logger.
    """

    LOG_LEVEL = DEFAULT_LOG_LEVEL

    def __init__(self, name):
        self.logger = get_logger(name)

    @property
    def level(self):
        """Returns the Python log level equivalent, 0 if disabled."""
        if not self.logger:
            return None

        if self.logger.disabled:
            return 0

        return self.logger.level

    @level.setter
    def level(self, level):
        level_to_int = {
            'quiet': 0,
            'error': 1,
            'warning': 2,
            'info': 3,
            'debug': 4}

        try:
            level = level_to_int[level]
        except KeyError:
            level = int(level)

        set_level(self.logger, level)

    def redirect(self, stream):
        """Write the output of this logger to stream, e.g. ``sys.stderr``."""
        for handler in self.logger.handlers:
            if isinstance(handler, logging.StreamHandler):
                handler.setStream(stream)

    def error(self, msg, *args, prefix=True, **kwargs):
        """Logs a message on error level, prefixed with ``[-]``."""

        if prefix:
            msg = f"[-] {msg}"

        self.logger.error(msg, *args, **kwargs)

    def warning(self, msg, *args, prefix=True, **kwargs):
        """Logs a message on warning level, prefixed with ``[!]``."""

        if prefix:
            msg = f"[!] {msg}"

        self.logger.warning(msg, *args, **kwargs)

    def warn(self, msg, *args, prefix=True, **kwargs):
        """Convenience function to log on warning level.

        Will just call :meth:`.Logger.warning`.
        """

        self.warning(msg, *args, **kwargs, prefix=prefix)

    def info(self, msg, *args, prefix=True, **kwargs):
        """Logs a message on info level, prefixed with ``[~]``."""

        if prefix:
            msg = f"[~] {msg}"

        self.logger.info(msg, *args, **kwargs)

    def debug(self, msg, *args, prefix=True, **kwargs):
        """Logs a message on debug level.

        If prefix is True, the current timestamp in brackets is prepended.

        Example:
            >>> log.debug("test")
            [20190426-155611] test
        """

        if prefix:
            now = time.strftime("%Y%m%d-%H%M%S")
            msg = f"[{now}] {msg}"

        self.logger.debug(msg, *args, **kwargs)

    def success(self, msg, *args, prefix=True, **kwargs):
        """Indicates a success, on info level, prefixed with ``[+]``."""

        if prefix:
            msg = f"[+] {msg}"

        self.logger.info(msg, *args, **kwargs)

    @staticmethod
    def question(msg, prefix=True):
        """Outputs a question.

        Questions are unaffected by the log level and always printed.
        """

        if prefix:
            msg = f"[?] {msg}"

        print(msg)
