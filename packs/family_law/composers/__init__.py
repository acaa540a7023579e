"""Family-court document composers."""

from packs.family_law.composers.alimony import AlimonyClaimComposer
from packs.family_law.composers.backup import BackupComposer
from packs.family_law.composers.base import BaseComposer
from packs.family_law.composers.custody import CustodyClaimComposer
from packs.family_law.composers.divorce import DivorceClaimComposer
from packs.family_law.composers.divorce_agreement import DivorceAgreementComposer
from packs.family_law.composers.property import PropertyClaimComposer

__all__ = [
    "AlimonyClaimComposer",
    "BackupComposer",
    "BaseComposer",
    "CustodyClaimComposer",
    "DivorceAgreementComposer",
    "DivorceClaimComposer",
    "PropertyClaimComposer",
]
