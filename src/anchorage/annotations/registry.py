"""Registry of inline result annotations."""

import logging
from collections.abc import Iterable

from anchorage.text.positions import Range
from anchorage.host.protocols import DocumentRef
from anchorage.annotations.anchor import Anchor, AnchorCollection
from anchorage.annotations.content import Content

LOGGER = logging.getLogger(__name__)


class ResultRegistry(AnchorCollection):
    """Value annotations, at most one per region of a document."""

    def insert(self, document: DocumentRef, range: Range, content: Content) -> Anchor:
        """Add a result, evicting any result on the same document it overlaps."""
        evicted = 0
        for index in range_reversed(len(self._anchors)):
            existing = self._anchors[index]
            if existing.document == document and existing.range.intersects(range):
                self.discard(existing)
                evicted += 1
        if evicted:
            LOGGER.debug("Evicted %d overlapping result(s) at %r", evicted, range)

        return self.create(document, range, content)

    def remove(self, anchor: Anchor) -> bool:
        return self.discard(anchor)

    def remove_all(self, document: DocumentRef | None = None) -> int:
        """Remove every result, or only those on ``document``."""
        removed = 0
        for index in range_reversed(len(self._anchors)):
            anchor = self._anchors[index]
            if document is None or anchor.document == document:
                self.discard(anchor)
                removed += 1
        return removed

    def remove_at_selections(
        self, document: DocumentRef, selections: Iterable[Range]
    ) -> int:
        """Remove results on ``document`` touched by any of the selections."""
        removed = 0
        for selection in selections:
            for index in range_reversed(len(self._anchors)):
                anchor = self._anchors[index]
                if anchor.document == document and selection.intersects(anchor.range):
                    self.discard(anchor)
                    removed += 1
        return removed


def range_reversed(length: int) -> range:
    """Indices of a list of ``length`` items, last first."""
    return range(length - 1, -1, -1)
