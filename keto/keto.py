"""
keto
====

The main entry point for rendering the user data of keto clusters.
Don't use it directly, instead install the package with setup.py.
It automatically creates an executable in your path.

"""
import argparse
import sys

from mach import mach1

from . import __version__
from .cli import render_userdata, write_userdata
from .errors import KetoError
from .util.logger import Logger

LOGGER = Logger(__name__)


def _render(config, role, output):
    if output is None:
        # stdout carries the user data
        LOGGER.redirect(sys.stderr)

    try:
        document = render_userdata(config, role)
    except (ValueError, OSError, KetoError) as exc:
        LOGGER.error(f"Error: {exc}")
        sys.exit(1)

    write_userdata(document, output)


@mach1()
class Keto:  # pylint: disable=no-self-use
    """
    The main entry point for the program. This class does the CLI parsing
    and descides which action shoud be taken
    """
    def __init__(self):
        self.parser.add_argument(  # pylint: disable=no-member
            "--version", action="store_true",
            help="show version and exit",
            default=argparse.SUPPRESS)

        verbosity_help = "".join([
            "set the verbosity level (",
            "0 = quiet, ",
            "1 = error, ",
            "2 = warning, ",
            "3 = info, ",
            "4 = debug)"])
        self.parser.add_argument("--verbosity",  # pylint: disable=no-member
                                 "-v",
                                 help=verbosity_help,
                                 choices=['0', '1', '2', '3', '4', 'quiet',
                                          'error', 'warning', 'info', 'debug'],
                                 type=str,
                                 default=3)

    def _get_version(self, _version):
        print("%s version: %s" % (self.__class__.__name__, __version__))
        sys.exit(0)

    def _get_verbosity(self, level):
        LOGGER.level = level

    def master(self, config: str, output: str = None):
        """
        Render the user data of a master

        config - cluster description file
        output - write the user data to this file instead of stdout
        """
        _render(config, 'master', output)

    def compute(self, config: str, output: str = None):
        """
        Render the user data of a compute node

        config - cluster description file
        output - write the user data to this file instead of stdout
        """
        _render(config, 'compute', output)


def main():
    """
    run and execute keto
    """
    k = Keto()

    # pylint: disable=no-member
    k.parser.description = 'Render the cloud-config user data of keto '\
                           'master and compute pools.'

    # pylint misses the fact that Keto is decorated with mach.
    # the mach decorator analyzes the methods in the class and dynamically
    # creates the CLI parser. It also adds the method run to the class.
    k.run()  # pylint: disable=no-member
