"""Split a domain into its right-anchored label suffixes."""

from __future__ import annotations

from .models import Subdomain


def signature(name: str) -> str:
    """Index key for a dotted name: the labels with separators removed."""
    return name.replace(".", "")


def decompose(domain: str) -> list[Subdomain]:
    """Return every suffix level of ``domain``, longest first.

    ``"a.b.example.com"`` gives ``a.b.example.com``, ``b.example.com``,
    ``example.com`` and ``com``. The input is taken as-is; callers
    normalize it and reject trailing dots beforehand.
    """
    levels = [Subdomain(signature(domain), domain)]
    dot = domain.find(".")
    while dot != -1:
        name = domain[dot + 1 :]
        levels.append(Subdomain(signature(name), name))
        dot = domain.find(".", dot + 1)
    return levels
