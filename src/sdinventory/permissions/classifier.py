"""Internal/external sharing classification for access entries."""

from __future__ import annotations

from typing import Iterable, Optional

from sdinventory.models import AccessEntry, PrincipalType

SHARING_NONE: str = "none"
INTERNAL_DOMAIN_SHARE: str = "internal-domain-share"
ERROR_PREFIX: str = "error: "
STATUS_SEPARATOR: str = ", "


def normalize_domains(domains: Iterable[str]) -> frozenset[str]:
    return frozenset(d.strip().lower() for d in domains if d and d.strip())


def _email_domain(email: Optional[str]) -> Optional[str]:
    if not email or "@" not in email:
        return None
    domain = email.rsplit("@", 1)[1].strip().lower()
    return domain or None


def _scan(
    entries: Iterable[AccessEntry],
    company_domains: Iterable[str],
) -> tuple[bool, int]:
    company = normalize_domains(company_domains)
    internal_domain = False
    external = 0

    for entry in entries:
        if entry.principal_type is PrincipalType.ANYONE:
            external += 1
            continue

        if entry.principal_type is PrincipalType.DOMAIN:
            domain = (entry.domain or "").strip().lower()
            if not domain:
                continue
            if domain in company:
                internal_domain = True
            else:
                external += 1
            continue

        domain = _email_domain(entry.email)
        if domain is None:
            continue
        if domain not in company:
            external += 1

    return internal_domain, external


def count_external(entries: Iterable[AccessEntry], company_domains: Iterable[str]) -> int:
    """Number of entries granting access outside the company domains."""
    return _scan(entries, company_domains)[1]


def classify_sharing(entries: Iterable[AccessEntry], company_domains: Iterable[str]) -> str:
    """
    Summarize how an item is shared.

    Returns:
        "none", "internal-domain-share", "external-share(n)", or both joined by
        ", " in that order. Entries lacking the identifier their type needs are
        ignored.
    """
    internal_domain, external = _scan(entries, company_domains)

    parts: list[str] = []
    if internal_domain:
        parts.append(INTERNAL_DOMAIN_SHARE)
    if external:
        parts.append(f"external-share({external})")

    if not parts:
        return SHARING_NONE
    return STATUS_SEPARATOR.join(parts)


def sharing_error(message: str) -> str:
    """Status marker for an item whose permissions could not be read."""
    return f"{ERROR_PREFIX}{message}"
