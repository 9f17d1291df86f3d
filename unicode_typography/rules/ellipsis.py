"""Rule that converts three consecutive periods to an ellipsis."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ..constants import ELLIPSIS
from .base import Edit, Kind, Rule, regex_finditer


if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from ..engine import Toggles


RE_ELLIPSIS = re.compile(r"\.\.\.")


class EllipsisRule(Rule):
    """Replace ``...`` with ``…``.

    Matches are consumed greedily from the left, so ``....`` yields a single
    edit covering its first three periods.
    """

    def __init__(self) -> None:
        super().__init__(name="ellipsis", toggle_attrs=("ellipsis",))

    def detect(self, text: str, toggles: Toggles) -> list[Edit]:
        return regex_finditer(text, RE_ELLIPSIS, Kind.ELLIPSIS, ELLIPSIS)
