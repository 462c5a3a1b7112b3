import textwrap
import unittest

import pytest

from keto.util.net import is_ip
from keto.util.util import (name_validation, k8s_version_validation,
                            load_cluster_config)


class Test_name_validation(unittest.TestCase):
    def test_names(self):
        """test name_validation func using different cluster-names"""
        for cluster_name in ["example", "11-04-2019-example",
                             "example-11-04-2019", "prod-1"]:
            assert name_validation(cluster_name) == cluster_name

        for cluster_name in ["bad" * 250, "bad:)chars", "", None]:
            with self.assertRaises(ValueError):
                name_validation(cluster_name)


def test_k8s_version_validation():
    VALID_VERSIONS = ["1.12.7", "1.13.5", "v1.8.4", "1.15.0"]
    INVALID_VERSIONS = [1, None, 1.13, "1", "1.13", "abc", "v1.8"]

    for vers in VALID_VERSIONS:
        assert k8s_version_validation(vers) is True

    for vers in INVALID_VERSIONS:
        assert k8s_version_validation(vers) is False


def test_is_ip():
    assert is_ip("10.0.0.1")
    assert is_ip("fe80::1")
    assert not is_ip("10.0.0")
    assert not is_ip("master-1")


def write_config(tmp_path, content):
    path = tmp_path / "cluster.yml"
    path.write_text(textwrap.dedent(content))
    return str(path)


def test_load_cluster_config(tmp_path):
    path = write_config(tmp_path, """
        cluster-name: prod-1
        cloud-provider: aws
        kube-version: v1.8.4
        masters:
          1: 10.0.0.2
          0: 10.0.0.1
        """)

    config = load_cluster_config(path)
    assert config['cluster-name'] == "prod-1"
    assert config['masters'] == {0: "10.0.0.1", 1: "10.0.0.2"}


def test_load_cluster_config_first_master(tmp_path):
    path = write_config(tmp_path, """
        cluster-name: prod-1
        cloud-provider: aws
        kube-version: v1.8.4
        """)

    assert load_cluster_config(path)['masters'] == {}


def test_load_cluster_config_compute(tmp_path):
    path = write_config(tmp_path, """
        cluster-name: prod-1
        cloud-provider: aws
        kube-version: v1.8.4
        masters: not checked for compute nodes
        """)

    assert load_cluster_config(path, 'compute')['cloud-provider'] == "aws"


@pytest.mark.parametrize("content", [
    "just a string\n",
    "cluster-name: [unclosed\n",
    "cluster-name: prod-1\n  cloud-provider: aws\n",
    "cloud-provider: aws\nkube-version: v1.8.4\n",
    "cluster-name: bad:)chars\ncloud-provider: aws\nkube-version: v1.8.4\n",
    "cluster-name: prod-1\ncloud-provider: aws\nkube-version: latest\n",
    ("cluster-name: prod-1\ncloud-provider: aws\nkube-version: v1.8.4\n"
     "masters:\n  0: master-0\n"),
    ("cluster-name: prod-1\ncloud-provider: aws\nkube-version: v1.8.4\n"
     "masters:\n- 10.0.0.1\n"),
])
def test_load_cluster_config_invalid(tmp_path, content):
    path = write_config(tmp_path, content)
    with pytest.raises(ValueError):
        load_cluster_config(path)
