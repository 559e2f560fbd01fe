# omemeta/core/identifiers.py

MAX_ID_INDICES = 4


def create_id(kind: str, *indices: int) -> str:
    """
    Create an object identifier such as ``Channel:0:2``.

    Args:
        kind: Object type name (e.g. "Image", "Detector")
        *indices: Up to four non-negative indices, outermost first

    Returns:
        The kind followed by each index, separated by colons.
    """
    if len(indices) > MAX_ID_INDICES:
        raise ValueError(
            f"At most {MAX_ID_INDICES} indices are supported, got {len(indices)}"
        )
    for index in indices:
        if index < 0:
            raise ValueError(f"Identifier indices must be non-negative: {indices}")

    return ":".join([kind] + [str(int(index)) for index in indices])
