"""
Which flooring sub-calculations run together.

Mortar and grout are never computed in the same run, and at least one option
is always selected, so only five combinations exist.
"""

import enum

FLOORING = "flooring"
MORTAR = "mortar"
GROUT = "grout"

OPTIONS = (FLOORING, MORTAR, GROUT)


class FlooringSelection(str, enum.Enum):
    FLOORING = "flooring"
    MORTAR = "mortar"
    GROUT = "grout"
    FLOORING_MORTAR = "flooring+mortar"
    FLOORING_GROUT = "flooring+grout"

    @property
    def options(self) -> frozenset:
        return frozenset(self.value.split("+"))

    @classmethod
    def from_options(cls, options) -> "FlooringSelection":
        """Raises ValueError for a combination outside the five valid ones."""
        wanted = frozenset(options)
        for selection in cls:
            if selection.options == wanted:
                return selection
        raise ValueError(f"Invalid flooring selection: {sorted(wanted)}")


def toggle(selection: FlooringSelection, option: str) -> FlooringSelection:
    """
    Flip one checkbox and return the resulting valid selection.

    - three options on: enabling flooring drops the other two; enabling mortar
      drops grout, enabling grout drops mortar
    - mortar and grout on together: the one just enabled wins
    - unticking the only selected option leaves the selection unchanged
    """
    if option not in OPTIONS:
        raise ValueError(f"Unknown flooring option: {option!r}")

    enabled = set(selection.options)
    if option in enabled:
        enabled.discard(option)
    else:
        enabled.add(option)

    if len(enabled) > 2:
        if option == FLOORING:
            enabled = {FLOORING}
        elif option == MORTAR:
            enabled.discard(GROUT)
        else:
            enabled.discard(MORTAR)

    if MORTAR in enabled and GROUT in enabled:
        enabled.discard(GROUT if option == MORTAR else MORTAR)

    if not enabled:
        return selection
    return FlooringSelection.from_options(enabled)
