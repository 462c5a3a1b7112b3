"""

.. _userdata:

keto.provision
--------------

Build the ``#cloud-config`` user data booted CoreOS machines configure
themselves with.

master
~~~~~~

Masters run etcd and the Kubernetes control plane. Their user data
contains the initial etcd cluster, built from all masters known when the
instance is created, see :func:`keto.provision.engine.member_list`.

compute
~~~~~~~

Compute nodes only run the kubelet setup of keto-k8 and the keto-tokens
client. Set ``KETO_K8_IMAGE_URI`` to try another keto-k8 image.
"""
from keto.provision.userdata import (UserData, render_master_cloud_config,
                                     render_compute_cloud_config)

__all__ = ['UserData', 'render_master_cloud_config',
           'render_compute_cloud_config']
