from __future__ import annotations

from typing import Optional, Pattern, Sequence, Tuple

from pydantic import BaseModel

from market_pulse.modules.classify.patterns import DEFAULT_CATEGORY

CategoryTable = Sequence[Tuple[str, str, Sequence[Pattern[str]]]]


class CategoryMatch(BaseModel):
    name: str
    icon: str


def tag_category(
    text: Optional[str],
    table: CategoryTable,
    default: Tuple[str, str] = DEFAULT_CATEGORY,
) -> CategoryMatch:
    if text:
        for name, icon, patterns in table:
            if any(pattern.search(text) for pattern in patterns):
                return CategoryMatch(name=name, icon=icon)
    return CategoryMatch(name=default[0], icon=default[1])
