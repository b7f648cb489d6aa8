# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field

from render_gateway.domain.exceptions import InvariantViolation


@dataclass(slots=True, frozen=True)
class Account:
    """Credential set for one tenant of the hosting API."""

    id: str
    name: str
    credential: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.id:
            raise InvariantViolation("account id must not be empty", field="id")
        if not self.name:
            raise InvariantViolation("account name must not be empty", field="name")
        if not self.credential:
            raise InvariantViolation("account credential must not be empty", field="credential")

    def matches_name(self, reference: str) -> bool:
        return self.name.casefold() == reference.casefold()
