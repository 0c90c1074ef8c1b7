"""Domain normalization - turns user input into a (name, extension) pair."""

import re
from dataclasses import dataclass
from typing import Tuple

from ..exceptions import InvalidDomainError

_PREFIX_RE = re.compile(r'^(https?://)?(www\.)?')


@dataclass(frozen=True)
class NormalizedDomain:
    """Canonical domain split on its last dot."""
    name: str
    extension: str

    def __str__(self) -> str:
        return join_domain(self.name, self.extension)


def clean_domain_name(raw: str) -> str:
    """Strip scheme, leading www. and any path from raw input.

    Returns an empty string when nothing domain-like remains (no dot).
    """
    domain = raw.strip().lower()
    domain = _PREFIX_RE.sub('', domain, count=1)

    slash_index = domain.find('/')
    if slash_index != -1:
        domain = domain[:slash_index]

    if '.' not in domain:
        return ''
    return domain


def split_domain(domain: str) -> Tuple[str, str]:
    """Split on the last dot. Multi-label TLDs like co.uk are not special-cased."""
    name, dot, extension = domain.rpartition('.')
    if not dot:
        return domain, ''
    return name, extension


def join_domain(name: str, extension: str) -> str:
    return f"{name}.{extension}"


def normalize(raw: str) -> NormalizedDomain:
    """Normalize raw user input, raising InvalidDomainError if it has no dot."""
    cleaned = clean_domain_name(raw)
    if not cleaned:
        raise InvalidDomainError(raw)

    name, extension = split_domain(cleaned)
    if not name or not extension:
        raise InvalidDomainError(raw, "Domain name and extension must be non-empty")

    return NormalizedDomain(name=name, extension=extension)
