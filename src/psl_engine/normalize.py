"""IDNA conversion shared by the rule builder and the resolver."""

from __future__ import annotations

from encodings.idna import ToASCII, dots


def to_ascii(text: str) -> str:
    """Punycode-encode every non-ASCII label of ``text``.

    Labels are split on all IDNA separators (``.``, U+3002, U+FF0E,
    U+FF61) and rejoined with ``.``. ASCII labels are returned
    untouched, case included. Raises ``UnicodeError`` when a label
    cannot be converted.
    """
    if text.isascii():
        return text
    return ".".join(
        label if label.isascii() else ToASCII(label).decode("ascii")
        for label in dots.split(text)
    )


def normalize_domain(domain: str) -> str:
    """Lower-case and punycode a query domain; never raises."""
    domain = dots.sub(".", domain.lower())
    try:
        return to_ascii(domain)
    except UnicodeError:
        return domain
