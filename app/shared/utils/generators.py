"""ID generators for persisted records (users, reset tokens)."""

from cuid2 import cuid_wrapper

_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Generate a collision-resistant, non-sequential record id (CUID2).

    Account ids appear in session tokens, so they must not leak signup
    order or volume the way autoincrement keys would.

    Returns:
        A new CUID string.
    """
    value = _cuid()
    if not isinstance(value, str):
        raise TypeError(f"Expected str from cuid generator, got {type(value).__name__}")
    return value
