"""
cli.py
======

misc functions to render user data from the command line, usually called
from ``keto.keto.Keto``.

Don't use directly
"""
import sys

from .provision.userdata import UserData
from .util.logger import Logger
from .util.util import load_cluster_config


LOGGER = Logger(__name__)


def render_userdata(config, role):
    """
    Render the user data of role for the cluster described in config

    Args:
        config (str): path of the cluster description file
        role (str): ``master`` or ``compute``

    Returns:
        the user data as ``bytes``

    Raises:
        ValueError if role is unknown or the config is invalid
        keto.errors.KetoError if the user data cannot be rendered
    """
    config_dict = load_cluster_config(config, role)
    userdata = UserData()

    if role == 'master':
        return userdata.render_master_cloud_config(
            config_dict['cloud-provider'], config_dict['cluster-name'],
            str(config_dict['kube-version']), config_dict['masters'])

    if role == 'compute':
        return userdata.render_compute_cloud_config(
            config_dict['cloud-provider'], config_dict['cluster-name'],
            str(config_dict['kube-version']))

    raise ValueError(f"unknown role {role}, must be master or compute")


def write_userdata(document, output=None):
    """Write the user data to output, or to stdout if output is None"""

    if output is None:
        sys.stdout.buffer.write(document)
        sys.stdout.flush()
        return None

    with open(output, "wb") as fh:
        fh.write(document)

    LOGGER.success("user data written to %s", output)
    return output
