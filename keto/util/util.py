"""
General purpose utilities
"""
import re

import yaml

from keto.util.net import is_ip


def name_validation(name):
    """
    Validates a name that will be used as a cluster name.
    Each name should conform to the following convention:
    not too long (maximum 244 characters)
    only ASCII-letters, numbers and dashes

    Args:
        name (str): The name to be checked

    Returns:
        Name if valid.

    Raises:
        ValueError if the name is invalid.
    """
    if not isinstance(name, str) or not name:
        raise ValueError("cluster-name must be a non empty string")
    if len(name) > 244:
        raise ValueError("cluster-name is too long")
    allowed = re.compile(r"^[a-zA-Z\d-]+$")
    if not allowed.match(name):
        raise ValueError(f"cluster-name '{name}' is using illegal characters. "
                         "Please change cluster-name in config file")
    return name


def k8s_version_validation(version):
    """
    Checks that version looks like a full Kubernetes release, e.g.
    ``1.8.4`` or ``v1.8.4``.
    """
    if not isinstance(version, str):
        return False

    return re.match(r"^v?\d+\.\d+\.\d+$", version) is not None


def load_cluster_config(path, role='master'):
    """
    Read and validate a cluster description file.

    Example file::

        cluster-name: prod-1
        cloud-provider: aws
        kube-version: v1.8.4
        masters:
          0: 10.0.0.1
          1: 10.0.0.2

    Args:
        path (str): the path of the YAML file
        role (str): ``master`` or ``compute``. Only masters need the
            ``masters`` key, which may be empty for the first master.

    Returns:
        The configuration as ``dict``.

    Raises:
        ValueError if a key is missing or has an invalid value.
    """
    with open(path, 'r') as stream:
        try:
            config = yaml.safe_load(stream)
        except yaml.YAMLError as err:
            raise ValueError(f"{path} is not valid YAML: {err}") from err

    if not isinstance(config, dict):
        raise ValueError(f"{path} does not contain a mapping")

    for key in ('cluster-name', 'cloud-provider', 'kube-version'):
        if not config.get(key):
            raise ValueError(f"{key} is missing in {path}")

    name_validation(config['cluster-name'])

    if not k8s_version_validation(str(config['kube-version'])):
        raise ValueError(
            f"kube-version '{config['kube-version']}' is not a valid version")

    if role == 'master':
        masters = config.get('masters') or {}
        if not isinstance(masters, dict):
            raise ValueError("masters must be a mapping of node id to IP")
        for node_id, address in masters.items():
            if not is_ip(str(address)):
                raise ValueError(
                    f"address '{address}' of master {node_id} is not an IP")
        config['masters'] = masters

    return config
