"""
userdata
========

Render the cloud-config user data for master and compute pools.

Example:
    >>> userdata = UserData()
    >>> doc = userdata.render_master_cloud_config(
    ...     "aws", "prod-1", "v1.8.4", {0: "10.0.0.1", 1: "10.0.0.2"})
    >>> b"Node0=https://10.0.0.1:2380,Node1=https://10.0.0.2:2380" in doc
    True

The returned bytes are passed as is to the cloud when launching an
instance. A :class:`keto.errors.RenderError` means the document could
not be created, in which case no instance must be launched.
"""
from keto.provision.context import (ClusterIdentity, Role,
                                    build_master_context,
                                    build_compute_context)
from keto.provision.skeletons import DEFAULT_VERSION, get_skeleton
from keto.util.logger import Logger

LOGGER = Logger(__name__)


class UserData:
    """
    Renders the user data of the machines in a cluster.

    Args:
        version (str): the skeleton version to render
        environ (dict): the environment consulted for overrides,
            ``os.environ`` if None
    """
    def __init__(self, version=DEFAULT_VERSION, environ=None):
        self.version = version
        self.environ = environ

    def render_master_cloud_config(self, cloud_provider_name, cluster_name,
                                   kube_version, master_registry):
        """
        render the cloud-config of a master

        Args:
            cloud_provider_name (str): e.g. ``aws``
            cluster_name (str): the name of the cluster, used to find the
                volumes of the cluster and as cloud provider tag
            kube_version (str): the Kubernetes version of the cluster
            master_registry (dict or MasterRegistry): node id to private IP
                of all masters known, may be empty for the first master

        Returns:
            the document as ``bytes``
        """
        identity = ClusterIdentity(cluster_name, cloud_provider_name,
                                   kube_version)
        context = build_master_context(identity, master_registry)
        document = get_skeleton(Role.MASTER, self.version).render(context)

        LOGGER.debug("cloud-config for masterpool: %s", document.decode())

        return document

    def render_compute_cloud_config(self, cloud_provider_name, cluster_name,
                                    kube_version):
        """
        render the cloud-config of a compute node

        Compute nodes are not etcd members, hence no master registry is
        needed.

        Returns:
            the document as ``bytes``
        """
        identity = ClusterIdentity(cluster_name, cloud_provider_name,
                                   kube_version)
        context = build_compute_context(identity, self.environ)
        document = get_skeleton(Role.COMPUTE, self.version).render(context)

        LOGGER.debug("cloud-config for computepool: %s", document.decode())

        return document


def render_master_cloud_config(cloud_provider_name, cluster_name,
                               kube_version, master_registry):
    """shortcut for :meth:`UserData.render_master_cloud_config`"""
    return UserData().render_master_cloud_config(
        cloud_provider_name, cluster_name, kube_version, master_registry)


def render_compute_cloud_config(cloud_provider_name, cluster_name,
                                kube_version):
    """shortcut for :meth:`UserData.render_compute_cloud_config`"""
    return UserData().render_compute_cloud_config(
        cloud_provider_name, cluster_name, kube_version)
