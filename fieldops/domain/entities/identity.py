"""Verified identity claims from the external identity provider."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ExternalIdentity:
    """Identity returned by a successful credential verification."""

    subject: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    avatar_url: str | None = None
    raw_claims: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)
