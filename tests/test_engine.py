"""
tests for keto.provision.engine
"""
import pytest

from keto.errors import RenderError
from keto.provision.context import MasterRegistry
from keto.provision.engine import Skeleton, member_list


def test_member_list():
    registry = MasterRegistry({0: "10.0.0.1", 1: "10.0.0.2"})
    assert member_list(registry) == \
        "Node0=https://10.0.0.1:2380,Node1=https://10.0.0.2:2380"


def test_member_list_is_sorted_by_node_id():
    registry = MasterRegistry({10: "10.0.0.11", 2: "10.0.0.3",
                               0: "10.0.0.1"})
    assert member_list(registry) == ("Node0=https://10.0.0.1:2380,"
                                     "Node2=https://10.0.0.3:2380,"
                                     "Node10=https://10.0.0.11:2380")


def test_member_list_single_master():
    registry = MasterRegistry({0: "10.0.0.1"})
    assert member_list(registry) == "Node0=https://10.0.0.1:2380"


def test_member_list_empty():
    assert member_list(MasterRegistry()) == ""


def test_member_list_entries():
    registry = MasterRegistry({i: "10.0.1.%d" % i for i in (4, 1, 3, 0, 2)})
    members = member_list(registry)
    assert not members.startswith(",")
    assert not members.endswith(",")
    entries = members.split(",")
    assert len(entries) == 5
    assert entries == ["Node%d=https://10.0.1.%d:2380" % (i, i)
                       for i in range(5)]


def test_skeleton_render():
    skeleton = Skeleton("test", "name: {{ cluster_name }}\n"
                        "members: {{ registry | member_list }}\n")
    doc = skeleton.render({"cluster_name": "prod-1",
                           "registry": MasterRegistry({0: "10.0.0.1"})})
    assert doc == (b"name: prod-1\n"
                   b"members: Node0=https://10.0.0.1:2380\n")


def test_skeleton_keeps_trailing_newline():
    assert Skeleton("test", "a: b\n").render({}) == b"a: b\n"


def test_skeleton_missing_field():
    skeleton = Skeleton("test", "name: {{ cluster_name }}\n")
    with pytest.raises(RenderError):
        skeleton.render({"cloud_provider_name": "aws"})


def test_skeleton_missing_registry():
    skeleton = Skeleton("test", "members: {{ registry | member_list }}\n")
    with pytest.raises(RenderError):
        skeleton.render({})


def test_malformed_skeleton():
    with pytest.raises(RenderError):
        Skeleton("broken", "{% for i in items %}{{ i }}\n")

    with pytest.raises(RenderError):
        Skeleton("broken", "{{ cluster_name \n")


def test_member_list_plain_mapping():
    assert member_list({"1": "10.0.0.2", "0": "10.0.0.1"}) == \
        "Node0=https://10.0.0.1:2380,Node1=https://10.0.0.2:2380"


def test_skeleton_invalid_registry():
    skeleton = Skeleton("test", "members: {{ registry | member_list }}\n")
    with pytest.raises(RenderError):
        skeleton.render({"registry": {"master-a": "10.0.0.1"}})

    with pytest.raises(RenderError):
        skeleton.render({"registry": {-1: "10.0.0.1"}})
