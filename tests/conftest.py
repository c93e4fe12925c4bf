"""Shared pytest fixtures for psl_engine tests."""

from __future__ import annotations

import pytest

from psl_engine.builder import build_table_from_text
from psl_engine.models import RuleTable
from psl_engine.resolver import SuffixResolver
from psl_engine.store import RuleStore

SAMPLE_RELEASE = "sample-1"

# A slice of public_suffix_list.dat covering every rule shape.
SAMPLE_LIST = """\
// This Source Code Form is subject to the terms of the Mozilla Public
// License, v. 2.0.

// ===BEGIN ICANN DOMAINS===

// ac : https://en.wikipedia.org/wiki/.ac
ac
com.ac

// ao
ao
pb.ao

// ar
ar
com.ar

biz
com

// bd : https://en.wikipedia.org/wiki/.bd
*.bd

// ck : https://en.wikipedia.org/wiki/.ck
*.ck
!www.ck

// cn
cn
com.cn
公司.cn
中国

// jp
jp
ac.jp
kyoto.jp
ide.kyoto.jp
*.kobe.jp
!city.kobe.jp

// mm
*.mm

// ng
ng
i.ng

// ing
ing

// uk
uk
co.uk
*.sch.uk

// us
us
ak.us
k12.ak.us

// рф
рф

// ===END ICANN DOMAINS===
// ===BEGIN PRIVATE DOMAINS===

// Google, Inc.
blogspot.co.uk
blogspot.com.ar

// CentralNic
uk.com

// ===END PRIVATE DOMAINS===
"""


@pytest.fixture
def sample_table() -> RuleTable:
    return build_table_from_text(SAMPLE_LIST, SAMPLE_RELEASE)


@pytest.fixture
def store(sample_table: RuleTable) -> RuleStore:
    return RuleStore(sample_table)


@pytest.fixture
def resolver(store: RuleStore) -> SuffixResolver:
    return SuffixResolver(store)
