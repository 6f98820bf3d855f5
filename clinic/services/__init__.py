"""Persistence gateway: the only code that reads or writes clinic tables."""

# Primary keys are BigAutoField (signed 64-bit).
MAX_ID = 2 ** 63 - 1


def in_id_range(value: int) -> bool:
    """Whether ``value`` could be a stored primary key.

    Ids outside the column range make the database driver raise instead of
    matching nothing, so callers treat them as absent up front.
    """
    return 0 < value <= MAX_ID
