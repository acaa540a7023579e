"""Gendered Hebrew terms for the two parties of a case."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"

    @classmethod
    def parse(cls, value: Any, default: Sex) -> Sex:
        """Map a recorded value to a :class:`Sex`, using ``default`` when unknown."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return default
        return default


# Legal prose in these documents uses the feminine forms when the recorded
# sex is absent or unrecognized.
DEFAULT_SEX = Sex.FEMALE


class PartyRole(str, Enum):
    CLAIMANT = "claimant"
    RESPONDENT = "respondent"


class Terminology(str, Enum):
    """Which pair of role nouns a document uses.

    ``CLAIM`` documents name the parties תובע/נתבע; ``PETITION`` documents
    (custody) name them מבקש/משיב.
    """

    CLAIM = "claim"
    PETITION = "petition"


_TITLES: dict[tuple[Terminology, PartyRole], dict[Sex, str]] = {
    (Terminology.CLAIM, PartyRole.CLAIMANT): {Sex.MALE: "התובע", Sex.FEMALE: "התובעת"},
    (Terminology.CLAIM, PartyRole.RESPONDENT): {Sex.MALE: "הנתבע", Sex.FEMALE: "הנתבעת"},
    (Terminology.PETITION, PartyRole.CLAIMANT): {Sex.MALE: "המבקש", Sex.FEMALE: "המבקשת"},
    (Terminology.PETITION, PartyRole.RESPONDENT): {Sex.MALE: "המשיב", Sex.FEMALE: "המשיבה"},
}


@dataclass(frozen=True, slots=True)
class GenderedTerms:
    """Resolved wording for one party."""

    title: str
    pronoun: str
    possessive: str
    name: str
    sex: Sex

    @property
    def is_male(self) -> bool:
        return self.sex is Sex.MALE

    @property
    def possessive_suffix(self) -> str:
        """Pronominal suffix, as in בבעלותו / בבעלותה."""
        return "ו" if self.is_male else "ה"

    @property
    def honorific(self) -> str:
        return "מר" if self.is_male else "גב'"

    @property
    def alias(self) -> str:
        """The "hereinafter" label printed under the party in the court header."""
        return '(להלן: "האיש/ האב")' if self.is_male else '(להלן: "האשה/ האם")'


def resolve_terms(
    role: PartyRole,
    sex: Any,
    name: str | None = None,
    *,
    terminology: Terminology = Terminology.CLAIM,
    default_sex: Sex = DEFAULT_SEX,
) -> GenderedTerms:
    """Resolve the title, pronoun, possessive and display name of a party.

    Args:
        role: Claimant or respondent.
        sex: Recorded sex (``"male"``/``"female"``); anything else falls back
            to ``default_sex``.
        name: Display name. When blank the title is used instead.
        terminology: Role nouns used by the document.
        default_sex: Sex assumed when ``sex`` is absent or unrecognized.

    Returns:
        The resolved terms. The function is pure and never raises.
    """
    resolved = Sex.parse(sex, default_sex)
    title = _TITLES[(terminology, role)][resolved]
    male = resolved is Sex.MALE
    display_name = name.strip() if isinstance(name, str) and name.strip() else title
    return GenderedTerms(
        title=title,
        pronoun="הוא" if male else "היא",
        possessive="שלו" if male else "שלה",
        name=display_name,
        sex=resolved,
    )
