"""Compile a Public Suffix List text into a RuleTable."""

from __future__ import annotations

import re
from collections.abc import Iterable

import structlog

from .decomposer import signature
from .errors import ParseError
from .models import Rule, RuleKind, RuleTable
from .normalize import to_ascii

log = structlog.get_logger()

ICANN_BEGIN = "BEGIN ICANN DOMAINS"
ICANN_END = "END ICANN DOMAINS"

# Canonical form after Punycode conversion; capital letters are rejected.
VALID_RULE_RE = re.compile(r"^[a-z0-9_!*\-.]+$")


def parse_rule(line: str, authoritative: bool) -> tuple[str, Rule]:
    """Classify one canonical rule line, returning ``(signature, rule)``.

    A ``*`` is only a wildcard as a whole leftmost label; anything else
    starting with ``*`` raises ``ParseError``.
    """
    if line.startswith("*."):
        kind, name = RuleKind.WILDCARD, line[2:]
    elif line.startswith("*"):
        raise ParseError(f'bad publicsuffix.org list data: "{line}"', line=line)
    elif line.startswith("!"):
        kind, name = RuleKind.EXCEPTION, line[1:]
    else:
        kind, name = RuleKind.NORMAL, line
    return signature(name), Rule(dotted_name=name, kind=kind, authoritative=authoritative)


def build_table(lines: Iterable[str | bytes], release: str) -> RuleTable:
    """Build a table from the raw list lines.

    Any unconvertible or non-canonical line aborts the build with a
    ``ParseError``; nothing partial is ever returned.
    """
    if isinstance(lines, (str, bytes)):
        lines = lines.splitlines()

    index: dict[str, list[Rule]] = {}
    icann = False
    rule_count = 0

    for lineno, raw in enumerate(lines, start=1):
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        line = raw.strip()

        # The section markers live inside comment lines.
        if ICANN_BEGIN in line:
            icann = True
            continue
        if ICANN_END in line:
            icann = False
            continue

        if not line or line.startswith("//"):
            continue

        try:
            line = to_ascii(line)
        except UnicodeError as e:
            raise ParseError(
                f"error while converting to ASCII {line}: {e}", line=line, lineno=lineno
            ) from e

        if not VALID_RULE_RE.match(line):
            raise ParseError(f'bad publicsuffix.org list data: "{line}"', line=line, lineno=lineno)

        try:
            key, rule = parse_rule(line, icann)
        except ParseError as e:
            raise ParseError(str(e), line=line, lineno=lineno) from e
        index.setdefault(key, []).append(rule)
        rule_count += 1

    table = RuleTable(index={k: tuple(v) for k, v in index.items()}, release=release)
    log.info("rule_table_built", release=release, rules=rule_count, signatures=len(index))
    return table


def build_table_from_text(text: str, release: str) -> RuleTable:
    return build_table(text.splitlines(), release)
