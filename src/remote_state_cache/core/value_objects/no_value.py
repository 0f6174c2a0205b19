"""The explicit "no value" marker.

``None`` is a perfectly good cached JSON value, so absence of a cached
entry or of a mutation output is signalled with a dedicated singleton.
"""


class _NoValue:
    """Singleton type of NO_VALUE."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_VALUE"

    def __reduce__(self):
        return (_NoValue, ())


NO_VALUE = _NoValue()


def has_value(value: object) -> bool:
    """True unless value is the NO_VALUE marker."""
    return value is not NO_VALUE
