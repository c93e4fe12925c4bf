"""The list snapshot shipped inside the package."""

from __future__ import annotations

from functools import lru_cache
from importlib import resources

import structlog

from .builder import build_table
from .models import RuleTable

log = structlog.get_logger()

BUNDLED_LIST = "data/public_suffix_list.dat"
# publicsuffix.org list as of 2023-02-09 23:26 UTC.
BUNDLED_RELEASE = "20230209.2326"


@lru_cache(maxsize=1)
def bundled_table() -> RuleTable:
    """Compile the packaged list once; used until a newer table is loaded."""
    text = resources.files("psl_engine").joinpath(BUNDLED_LIST).read_text(encoding="utf-8")
    table = build_table(text, BUNDLED_RELEASE)
    log.info("bundled_list_loaded", release=BUNDLED_RELEASE, rules=table.rule_count)
    return table
