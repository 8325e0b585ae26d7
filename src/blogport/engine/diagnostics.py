"""Operator-facing notices raised while transcoding.

None of these stop a conversion: the output keeps the original content and a
human reviews the result afterwards.
"""

import logging
from collections import Counter
from enum import Enum

logger = logging.getLogger(__name__)


class NoticeKind(str, Enum):
    UNRESOLVED_LINK = "unresolved_link"
    UNHANDLED_STYLE = "unhandled_style"
    UNHANDLED_MARKUP = "unhandled_markup"


_MESSAGES = {
    NoticeKind.UNRESOLVED_LINK: "Internal link without a matching post: %s",
    NoticeKind.UNHANDLED_STYLE: "Span styling not understood, passing content through: %s",
    NoticeKind.UNHANDLED_MARKUP: "Unknown markup kept as raw HTML: %s",
}


class Diagnostics:
    """Logs notices and keeps a tally per kind."""

    def __init__(self) -> None:
        self.counts: Counter[NoticeKind] = Counter()

    def notice(self, kind: NoticeKind, detail: str) -> None:
        self.counts[kind] += 1
        logger.warning(_MESSAGES[kind], detail)

    @property
    def total(self) -> int:
        return sum(self.counts.values())
