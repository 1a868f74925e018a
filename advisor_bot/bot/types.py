"""Typed structures shared across bot components."""

from __future__ import annotations

import re
from enum import Enum
from typing import Final, NamedTuple


class ActionKind(str, Enum):
    """Inline button actions, valued by their callback data prefix."""

    FAV_SAVE = "fav_save"
    FAV_REMOVE = "fav_remove"
    FB_LIKE = "fb_like"
    FB_DISLIKE = "fb_dislike"


_CALLBACK_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?P<kind>fav_save|fav_remove|fb_like|fb_dislike)_(?P<index>\d+)$"
)


class CallbackAction(NamedTuple):
    """Decoded inline button press.

    Attributes:
        kind: What the button does.
        index: Position in the last shown cards, or in the favorites list
            for removals.
    """

    kind: ActionKind
    index: int

    def encode(self) -> str:
        """Render the action as callback data, e.g. ``fav_save_0``."""
        return f"{self.kind.value}_{self.index}"

    @classmethod
    def decode(cls, data: str | None) -> CallbackAction | None:
        """Parse callback data.

        Returns:
            The action, or None if the data is not a known action token.
        """
        if not data:
            return None

        match = _CALLBACK_PATTERN.match(data)
        if match is None:
            return None

        return cls(ActionKind(match.group("kind")), int(match.group("index")))
