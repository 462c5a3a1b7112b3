# pylint: disable=missing-docstring
from importlib import metadata

try:
    __version__ = metadata.version('keto')
except metadata.PackageNotFoundError:
    __version__ = '0.1.0'

# Defining some constants
DEFAULT_KETO_K8_IMAGE = "quay.io/ukhomeofficedigital/keto-k8:v0.1.0"
DEFAULT_NETWORK_PROVIDER = "canal"
KETO_K8_IMAGE_URI_ENV = "KETO_K8_IMAGE_URI"
ETCD_PEER_PORT = 2380
