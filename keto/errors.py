"""
Exceptions raised while building user data.
"""


class KetoError(Exception):
    """Base class of all keto errors"""


class ContextError(KetoError):
    """A render context could not be built from the given parameters"""


class RenderError(KetoError):
    """A skeleton could not be compiled or rendered"""
