import logging
from typing import List, Sequence

logger = logging.getLogger(__name__)


def order_names(names: Sequence[str], current_name: str = "", prioritize_current: bool = False) -> List[str]:
    """Sort names for a chooser, optionally pulling the current one to the top.

    Sorting is by plain code point order. The input sequence is never
    modified. If ``current_name`` is not among ``names`` the sorted list is
    returned as is.
    """
    if not names:
        return list(names)

    ordered = sorted(names)

    if prioritize_current and current_name:
        if current_name in ordered:
            ordered.remove(current_name)
            ordered.insert(0, current_name)
        else:
            logger.info("current entry '%s' not found in list", current_name)

    return ordered


def cursor_position(names: Sequence[str], current_name: str) -> int:
    """Index to highlight first, 0 when current_name is not listed"""
    for i, name in enumerate(names):
        if name == current_name:
            return i
    if current_name and names:
        logger.info("current entry '%s' not found in list, defaulting to first item", current_name)
    return 0
