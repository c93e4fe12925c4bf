"""Public suffix lookups against the active rule table."""

from __future__ import annotations

from .decomposer import decompose
from .errors import InvalidDomainError
from .models import RuleKind, SuffixMatch
from .normalize import normalize_domain
from .store import RuleStore

NO_SUFFIX = SuffixMatch("", False, False)


class SuffixResolver:
    """Resolve domains against whatever table ``store`` currently holds.

    Every call reads the store once, so a lookup racing an update sees
    either the old table or the new one, never a mix. Lookups never
    raise; input that cannot be matched yields the default ``*`` rule.
    """

    def __init__(self, store: RuleStore) -> None:
        self._store = store

    @property
    def store(self) -> RuleStore:
        return self._store

    @property
    def release(self) -> str:
        return self._store.release

    def resolve(self, domain: str) -> SuffixMatch:
        domain = normalize_domain(domain)
        # A trailing dot leaves no last label to anchor the search on.
        if not domain or domain.endswith("."):
            return NO_SUFFIX

        table = self._store.current()

        # Longest level first: the first level with an applicable rule wins.
        for sub in decompose(domain):
            for rule in table.rules_for(sub.signature):
                # A shared signature does not imply a match (i.ng vs ing).
                if not sub.dotted.endswith(rule.dotted_name):
                    continue

                match rule.kind:
                    case RuleKind.EXCEPTION:
                        _, _, parent = rule.dotted_name.partition(".")
                        return SuffixMatch(parent, rule.authoritative, True)

                    case RuleKind.WILDCARD:
                        if len(domain) < len(rule.dotted_name) + 2:
                            # ".ck" against "*.ck": empty wildcard label.
                            if domain == "." + rule.dotted_name:
                                return SuffixMatch(domain, rule.authoritative, True)
                            continue

                        dot = len(domain)
                        for _ in range(rule.label_count):
                            dot = domain.rfind(".", 0, dot)
                            if dot == -1:
                                break
                        return SuffixMatch(domain[dot + 1 :], rule.authoritative, True)

                    case RuleKind.NORMAL:
                        return SuffixMatch(rule.dotted_name, rule.authoritative, True)

        # Implicit "*" rule: the last label.
        return SuffixMatch(domain[domain.rfind(".") + 1 :], False, False)

    def public_suffix(self, domain: str) -> str:
        return self.resolve(domain).suffix

    def is_icann(self, domain: str) -> bool:
        return self.resolve(domain).authoritative

    def has_public_suffix(self, domain: str) -> bool:
        """True when an explicit list rule covers ``domain``."""
        return self.resolve(domain).matched

    def registrable_domain(self, domain: str) -> str:
        """Return the public suffix plus one label (eTLD+1).

        Raises ``InvalidDomainError`` when ``domain`` is no longer than
        its suffix or the suffix does not start on a label boundary.
        """
        domain = normalize_domain(domain)
        if not domain or domain.endswith("."):
            raise InvalidDomainError(f"cannot derive eTLD+1 for domain {domain!r}")

        suffix = self.resolve(domain).suffix

        if len(domain) <= len(suffix):
            raise InvalidDomainError(f"cannot derive eTLD+1 for domain {domain!r}")

        i = len(domain) - len(suffix) - 1
        if domain[i] != ".":
            raise InvalidDomainError(f"invalid public suffix {suffix!r} for domain {domain!r}")

        return domain[domain.rfind(".", 0, i) + 1 :]
