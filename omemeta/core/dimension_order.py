# omemeta/core/dimension_order.py
from enum import Enum
from typing import List, Tuple

from .errors import InvalidOrderSpecification

AXES = ("X", "Y", "Z", "T", "C")
# Axes appended, in this order, when missing from a partial specification
TAIL_AXES = ("Z", "T", "C")


class DimensionOrder(str, Enum):
    """Canonical orderings of the five acquisition axes."""

    XYZCT = "XYZCT"
    XYZTC = "XYZTC"
    XYCTZ = "XYCTZ"
    XYCZT = "XYCZT"
    XYTCZ = "XYTCZ"
    XYTZC = "XYTZC"

    @property
    def axes(self) -> Tuple[str, ...]:
        """Return the axis letters, fastest varying first."""
        return tuple(self.value)

    def axis_index(self, axis: str) -> int:
        """Return the position of an axis letter in this order."""
        return self.value.index(axis.upper())

    @classmethod
    def from_string(cls, value: str) -> "DimensionOrder":
        """Look up an exact canonical order such as "XYZCT"."""
        try:
            return cls(value.upper())
        except ValueError:
            raise InvalidOrderSpecification(
                f"'{value}' is not a valid dimension order. Valid: "
                f"{[order.value for order in cls]}"
            ) from None


def create_dimension_order(order: str) -> DimensionOrder:
    """
    Resolve a partial or redundant axis order string to a canonical order.

    Unknown characters are ignored and repeated axes keep their first
    position. The result must start with X then Y; Z, T and C are appended
    in that order when missing.

    Args:
        order: Axis letters, e.g. "XYC" or "XYXYZTCZ"; may be empty

    Returns:
        The matching DimensionOrder member.

    Raises:
        InvalidOrderSpecification: If X and Y are not the leading axes.
    """
    seen: List[str] = []
    for char in order:
        if char in AXES and char not in seen:
            seen.append(char)

    for position, expected in enumerate(("X", "Y")):
        if len(seen) > position and seen[position] != expected:
            raise InvalidOrderSpecification(
                f"Invalid dimension order '{order}': axis {position + 1} must be "
                f"{expected}, got {seen[position]}"
            )

    resolved = ["X", "Y"] + seen[2:]
    resolved.extend(axis for axis in TAIL_AXES if axis not in resolved)

    return DimensionOrder("".join(resolved))
