"""
engine
======

Expand cloud-config skeletons against a render context.

Skeletons are Jinja2 templates compiled once, see :class:`Skeleton`.
Besides plain ``{{ field }}`` substitution they can use the
``member_list`` filter which turns a
:class:`keto.provision.context.MasterRegistry` into the etcd initial
cluster string::

    >>> registry = MasterRegistry({1: "10.0.0.2", 0: "10.0.0.1"})
    >>> member_list(registry)
    'Node0=https://10.0.0.1:2380,Node1=https://10.0.0.2:2380'

Every etcd peer must agree on this string byte for byte, so entries are
always emitted in ascending node id order.
"""
from jinja2 import Environment, StrictUndefined, TemplateError

from keto import ETCD_PEER_PORT
from keto.errors import ContextError, RenderError
from keto.provision.context import MasterRegistry


def member_list(registry, port=ETCD_PEER_PORT):
    """
    format the members of a master registry as ``Node<id>=https://<ip>:<port>``
    joined by commas. An empty registry gives an empty string. A plain
    mapping is converted to a :class:`MasterRegistry` first.
    """
    if not isinstance(registry, MasterRegistry):
        registry = MasterRegistry(registry)
    return ",".join("Node%d=https://%s:%d" % (node_id, address, port)
                    for node_id, address in sorted(registry.items()))


def _environment():
    env = Environment(undefined=StrictUndefined,
                      keep_trailing_newline=True,
                      autoescape=False)
    env.filters['member_list'] = member_list
    return env


ENV = _environment()


class Skeleton:
    """
    A compiled cloud-config skeleton.

    Args:
        name (str): a name used in error messages, e.g. ``master-v1``
        source (str): the Jinja2 source of the document

    Raises:
        RenderError if the source is malformed
    """
    def __init__(self, name, source):
        self.name = name
        try:
            self.template = ENV.from_string(source)
        except TemplateError as err:
            raise RenderError(f"skeleton {name} is malformed: {err}") from err

    def render(self, context):
        """
        render the skeleton with the fields of context

        Args:
            context: a :class:`keto.provision.context.RenderContext` or
                any mapping of field names to values

        Returns:
            the rendered document as UTF-8 encoded ``bytes``

        Raises:
            RenderError if the skeleton references a field which is not in
            the context
        """
        fields = context.fields() if hasattr(context, 'fields') else context
        try:
            document = self.template.render(**fields)
        except (TemplateError, ContextError) as err:
            raise RenderError(
                f"failed to render skeleton {self.name}: {err}") from err

        return document.encode()

    def __repr__(self):
        return f"<Skeleton {self.name}>"
