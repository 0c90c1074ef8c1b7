"""Exception hierarchy for domainseo."""


class DomainSEOError(Exception):
    """Base class for all domainseo errors."""


class InvalidDomainError(DomainSEOError, ValueError):
    """Raised when a raw input cannot be turned into a domain name."""

    def __init__(self, raw: str, reason: str = "Invalid domain name"):
        self.raw = raw
        self.reason = reason
        super().__init__(f"{reason}: {raw!r}")


class EnrichmentError(DomainSEOError):
    """Pricing, availability or analytics lookup failed.

    Analysis code catches this (and any other collaborator failure) and
    returns results without the enrichment attached.
    """


class AccountError(DomainSEOError):
    """Account operation refused (unknown user, duplicate email, ...)."""
