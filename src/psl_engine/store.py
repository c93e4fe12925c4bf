"""Holder of the currently active rule table."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from .builder import build_table
from .models import RuleTable
from .snapshot import bundled_table

if TYPE_CHECKING:
    from .retriever import ListRetriever

log = structlog.get_logger()


class RuleStore:
    """Publishes rule tables by swapping a single reference.

    Tables are immutable, so a reader holding the result of ``current()``
    keeps a consistent snapshot whatever gets published meanwhile. There
    is no lock: concurrent publishers race and the last swap wins.
    """

    def __init__(self, initial: RuleTable | None = None) -> None:
        self._table = initial if initial is not None else bundled_table()

    def current(self) -> RuleTable:
        return self._table

    @property
    def release(self) -> str:
        return self._table.release

    def publish(self, table: RuleTable) -> bool:
        """Make ``table`` the active one unless it carries no new release."""
        if not table.release:
            log.info("publish_skipped", reason="empty_release")
            return False
        if table.release == self._table.release:
            log.info("publish_skipped", reason="same_release", release=table.release)
            return False
        self._table = table
        log.info("rule_table_published", release=table.release, rules=table.rule_count)
        return True

    def replace(self, table: RuleTable) -> None:
        """Unconditionally swap in ``table``, e.g. one loaded from disk."""
        self._table = table
        log.info("rule_table_replaced", release=table.release, rules=table.rule_count)

    def update(self, retriever: ListRetriever) -> bool:
        """Fetch, compile and publish the latest list from ``retriever``.

        Returns False when there was nothing new. Retrieval and parse
        errors propagate; the active table is left as it was.
        """
        latest = retriever.get_latest_release_tag()
        if not latest:
            log.info("update_skipped", reason="empty_release")
            return False
        if latest == self._table.release:
            log.info("update_skipped", reason="up_to_date", release=latest)
            return False

        table = build_table(retriever.get_list(latest), latest)
        return self.publish(table)
