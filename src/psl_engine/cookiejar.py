"""Cookie-scoping adapters over the suffix resolver."""

from __future__ import annotations

from http.cookiejar import Cookie, DefaultCookiePolicy

import structlog

from .resolver import SuffixResolver

log = structlog.get_logger()


class PublicSuffixList:
    """The query surface cookie jars need: one suffix per domain."""

    def __init__(self, resolver: SuffixResolver) -> None:
        self.resolver = resolver

    def public_suffix(self, domain: str) -> str:
        return self.resolver.public_suffix(domain)

    def __str__(self) -> str:
        return f"publicsuffix.org's public_suffix_list.dat, git revision: {self.resolver.release}"


class SuffixCookiePolicy(DefaultCookiePolicy):
    """Refuses cookies scoped to a public suffix (``Domain=.co.uk``)."""

    def __init__(self, suffix_list: PublicSuffixList, **kwargs) -> None:
        super().__init__(**kwargs)
        self.suffix_list = suffix_list

    def set_ok_domain(self, cookie: Cookie, request) -> bool:
        if cookie.domain_specified:
            domain = cookie.domain.lstrip(".").lower()
            if domain and self.suffix_list.public_suffix(domain) == domain:
                log.info("cookie_rejected", reason="public_suffix_domain", domain=cookie.domain)
                return False
        return super().set_ok_domain(cookie, request)
