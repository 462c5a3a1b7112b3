"""
context
=======

Typed parameters for rendering the user data of a node.

:func:`build_master_context` and :func:`build_compute_context` are the
only places where process wide defaults enter a render. Field *contents*
are not validated here, callers hand in well formed names and addresses
(see :func:`keto.util.util.load_cluster_config`).
"""
import enum
import os
from collections import namedtuple
from collections.abc import Mapping

from keto import (DEFAULT_KETO_K8_IMAGE, DEFAULT_NETWORK_PROVIDER,
                  KETO_K8_IMAGE_URI_ENV)
from keto.errors import ContextError


class Role(enum.Enum):
    """The role a node plays in the cluster"""
    MASTER = "master"
    COMPUTE = "compute"


ClusterIdentity = namedtuple('ClusterIdentity', ['cluster_name',
                                                 'cloud_provider_name',
                                                 'kubernetes_version'])


def _node_id(key):
    if isinstance(key, bool):
        raise ContextError(f"invalid node id {key!r}")
    if isinstance(key, str):
        if not key.isdigit():
            raise ContextError(f"invalid node id {key!r}")
        key = int(key)
    if not isinstance(key, int) or key < 0:
        raise ContextError(f"invalid node id {key!r}")
    return key


class MasterRegistry(Mapping):
    """
    The masters known when rendering, as a read only mapping of node id to
    private IP address.

    Iteration is always in ascending node id order, no matter in which
    order the masters were given. Ids given as decimal strings
    (e.g. ``"0"``) are converted to ``int``.

    Args:
        masters (dict or iterable of pairs): node id to address

    Raises:
        ContextError if an id is negative, not an integer or given twice
    """
    def __init__(self, masters=None):
        items = masters.items() if isinstance(masters, Mapping) else \
            (masters or [])
        nodes = {}
        for key, address in items:
            node_id = _node_id(key)
            if node_id in nodes:
                raise ContextError(f"node id {node_id} is given twice")
            nodes[node_id] = address

        self._nodes = dict(sorted(nodes.items()))

    def __getitem__(self, node_id):
        return self._nodes[node_id]

    def __iter__(self):
        return iter(self._nodes)

    def __len__(self):
        return len(self._nodes)

    def __repr__(self):
        return f"MasterRegistry({self._nodes!r})"


class RenderContext:  # pylint: disable=too-few-public-methods
    """
    All fields a skeleton of a given role can reference.

    A context is built per render and never changed afterwards. Use
    :func:`build_master_context` or :func:`build_compute_context` instead
    of creating it directly.

    Raises:
        ContextError if a field is missing
    """
    # pylint: disable=too-many-arguments
    def __init__(self, role, identity, keto_k8_image, network_provider=None,
                 master_registry=None):
        self.role = role
        self.identity = identity
        self.keto_k8_image = keto_k8_image
        self.network_provider = network_provider
        self.master_registry = master_registry

        missing = [name for name in self._required()
                   if self._field(name) is None]
        if missing:
            raise ContextError("missing field(s) for %s context: %s" % (
                role.value, ", ".join(missing)))

    def _required(self):
        required = ['cluster_name', 'cloud_provider_name',
                    'kubernetes_version', 'keto_k8_image']
        if self.role is Role.MASTER:
            required += ['network_provider', 'master_registry']
        return required

    def _field(self, name):
        if name in ClusterIdentity._fields:
            return getattr(self.identity, name, None)
        return getattr(self, name)

    def fields(self):
        """
        return the fields of this context as ``dict``, which is what the
        skeletons are rendered with. Fields which do not belong to the role
        are left out, so a skeleton referencing them fails to render.
        """
        return {name: self._field(name) for name in self._required()}


def build_master_context(identity, registry):
    """
    create the context for a master node

    Args:
        identity (ClusterIdentity): the cluster the node belongs to
        registry (MasterRegistry): all masters known so far, may be empty
            when the first master is created
    """
    if not isinstance(registry, MasterRegistry):
        registry = MasterRegistry(registry)

    return RenderContext(Role.MASTER, identity, DEFAULT_KETO_K8_IMAGE,
                         network_provider=DEFAULT_NETWORK_PROVIDER,
                         master_registry=registry)


def build_compute_context(identity, environ=None):
    """
    create the context for a compute node

    If ``KETO_K8_IMAGE_URI`` is set to a non empty value in environ it
    replaces the default keto-k8 image. This is only meant for testing a
    new keto-k8 build without releasing keto.

    Args:
        identity (ClusterIdentity): the cluster the node belongs to
        environ (dict): the environment to read, ``os.environ`` if None
    """
    if environ is None:
        environ = os.environ

    image = environ.get(KETO_K8_IMAGE_URI_ENV) or DEFAULT_KETO_K8_IMAGE

    return RenderContext(Role.COMPUTE, identity, image)
