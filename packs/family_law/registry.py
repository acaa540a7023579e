"""Claim type registry: maps each claim type to the composer that builds it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from document_engine.exceptions import UnsupportedClaimTypeError
from intake.models import ClaimType
from packs.family_law.composers import (
    AlimonyClaimComposer,
    BaseComposer,
    CustodyClaimComposer,
    DivorceAgreementComposer,
    DivorceClaimComposer,
    PropertyClaimComposer,
)


@dataclass(frozen=True)
class ClaimTemplate:
    """Registry entry for one claim type."""

    claim_type: ClaimType
    composer: type[BaseComposer]

    def to_dict(self) -> dict[str, Any]:
        return {
            "claim_type": self.claim_type.value,
            "label": self.claim_type.label,
            "composer": self.composer.__name__,
        }


CLAIM_TYPES: dict[ClaimType, ClaimTemplate] = {
    ClaimType.PROPERTY: ClaimTemplate(ClaimType.PROPERTY, PropertyClaimComposer),
    ClaimType.CUSTODY: ClaimTemplate(ClaimType.CUSTODY, CustodyClaimComposer),
    ClaimType.ALIMONY: ClaimTemplate(ClaimType.ALIMONY, AlimonyClaimComposer),
    ClaimType.DIVORCE: ClaimTemplate(ClaimType.DIVORCE, DivorceClaimComposer),
    ClaimType.DIVORCE_AGREEMENT: ClaimTemplate(ClaimType.DIVORCE_AGREEMENT, DivorceAgreementComposer),
}


def available_claim_types() -> list[str]:
    return [claim.value for claim in CLAIM_TYPES]


def get_claim_template(claim_type: ClaimType | str) -> ClaimTemplate:
    """Look up the registry entry for a claim type.

    Raises:
        UnsupportedClaimTypeError: If the claim type is unknown.
    """
    try:
        key = ClaimType(claim_type)
    except ValueError:
        raise UnsupportedClaimTypeError(str(claim_type), available_claim_types()) from None
    return CLAIM_TYPES[key]


def get_composer(claim_type: ClaimType | str) -> type[BaseComposer]:
    return get_claim_template(claim_type).composer


def list_claim_types() -> list[dict[str, Any]]:
    """Every known claim type with its label and composer."""
    return [template.to_dict() for template in CLAIM_TYPES.values()]
