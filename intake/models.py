"""Pydantic models for the client intake record.

Wire names are camelCase (``fullName``, ``idNumber`` ...); Python attributes
are snake_case. Unknown keys are kept so that the backup Q&A document can
still report them.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from document_engine.formatting import decode_image

# Yes/no answers arrive as "yes"/"no", "כן"/"לא" or booleans.
Answer = str | bool | int | float | None


class IntakeModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )


class ClaimType(str, Enum):
    PROPERTY = "property"
    CUSTODY = "custody"
    ALIMONY = "alimony"
    DIVORCE = "divorce"
    DIVORCE_AGREEMENT = "divorceAgreement"

    @property
    def label(self) -> str:
        return _CLAIM_LABELS[self]


_CLAIM_LABELS = {
    ClaimType.PROPERTY: "תביעה רכושית",
    ClaimType.CUSTODY: "תביעת משמורת",
    ClaimType.ALIMONY: "תביעת מזונות",
    ClaimType.DIVORCE: "תביעת גירושין",
    ClaimType.DIVORCE_AGREEMENT: "הסכם גירושין",
}


class RelationshipType(str, Enum):
    MARRIED = "married"
    COMMON_LAW = "commonLaw"
    SEPARATED = "separated"
    NOT_MARRIED = "notMarried"


class Party(IntakeModel):
    full_name: str | None = None
    id_number: str | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    birth_date: str | None = None
    gender: str | None = None


class Child(IntakeModel):
    first_name: str | None = None
    last_name: str | None = None
    id_number: str | None = None
    birth_date: str | None = None
    address: str | None = None
    street: str | None = None
    name_of_parent: str | None = None
    child_relationship: str | None = None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class PropertyItem(IntakeModel):
    description: str | None = None
    value: str | None = None
    amount: str | None = None
    owner: str | None = None
    debtor: str | None = None
    purchase_date: str | None = None


class Job(IntakeModel):
    monthly_salary: str | None = None


class PropertyAnswers(IntakeModel):
    apartments: list[PropertyItem] = Field(default_factory=list)
    vehicles: list[PropertyItem] = Field(default_factory=list)
    savings: list[PropertyItem] = Field(default_factory=list)
    benefits: list[PropertyItem] = Field(default_factory=list)
    properties: list[PropertyItem] = Field(default_factory=list)
    debts: list[PropertyItem] = Field(default_factory=list)

    applicant_employment_status: str | None = None
    applicant_employer: str | None = None
    applicant_gross_salary: str | None = None
    applicant_gross_income: str | None = None
    applicant_estimated_income: str | None = None
    applicant_additional_income: str | None = None
    respondent_employment_status: str | None = None
    respondent_employer: str | None = None
    respondent_gross_salary: str | None = None
    respondent_gross_income: str | None = None
    respondent_estimated_income: str | None = None
    respondent_additional_income: str | None = None
    job1: Job | None = None
    job2: Job | None = None

    separation_date: str | None = None

    def salary(self, respondent: bool = False) -> str | None:
        """Gross monthly salary: gross salary, then gross income, then the job block."""
        prefix = "respondent" if respondent else "applicant"
        job = self.job2 if respondent else self.job1
        return (
            getattr(self, f"{prefix}_gross_salary")
            or getattr(self, f"{prefix}_gross_income")
            or (job.monthly_salary if job else None)
        )


class CustodyAnswers(IntakeModel):
    current_living_arrangement: str | None = None
    since_when: str | None = None
    current_visitation_arrangement: str | None = None
    split_arrangement_details: str | None = None
    who_should_have_custody: str | None = None
    requested_arrangement: str | None = None
    why_not_other_parent: str | None = None


class NeedItem(IntakeModel):
    """One monthly expense line in the children's or household needs."""

    category: str | None = None
    description: str | None = None
    monthly_amount: str | None = None


class BankAccount(IntakeModel):
    bank_name: str | None = None
    account_number: str | None = None
    owner: str | None = None


class AlimonyAnswers(IntakeModel):
    relationship_description: str | None = None
    children_living_with: str | None = None
    children_needs: list[NeedItem] = Field(default_factory=list)
    household_needs: list[NeedItem] = Field(default_factory=list)
    was_previous_alimony: Answer = None
    previous_alimony_details: str | None = None
    previous_alimony_amount: str | None = None
    has_bank_accounts: Answer = None
    bank_accounts: list[BankAccount] = Field(default_factory=list)
    has_vehicle: Answer = None
    vehicle_details: str | None = None


class DivorceAnswers(IntakeModel):
    relationship_description: str | None = None
    who_wants_divorce_and_why: str | None = None
    wedding_city: str | None = None
    religious_marriage: Answer = None
    religious_council: str | None = None
    police_complaints: Answer = None
    police_complaints_who: str | None = None
    police_complaints_where: str | None = None
    police_complaints_date: str | None = None
    police_complaints_outcome: str | None = None
    divorce_reasons: str | None = None
    had_previous_mediation: Answer = None
    previous_mediation_details: str | None = None
    marriage_counseling_details: str | None = None
    ketubah_amount: str | None = None
    ketubah_request: str | None = None


class DivorceAgreementAnswers(IntakeModel):
    property_agreement: str | None = None
    property_custom: str | None = None
    custody_agreement: str | None = None
    custody_custom: str | None = None
    visitation_agreement: str | None = None
    visitation_custom: str | None = None
    visitation_schedule: str | None = None
    alimony_agreement: str | None = None
    alimony_amount: str | None = None
    alimony_custom: str | None = None
    additional_terms: str | None = None


class FamilyCase(IntakeModel):
    case_number: str | None = None
    case_type: str | None = None
    court: str | None = None
    status: str | None = None


class GlobalAnswers(IntakeModel):
    living_separately: Answer = None
    separation_date: str | None = None
    court_proceedings: Answer = None
    contacted_welfare: Answer = None
    contacted_marriage_counseling: Answer = None
    willing_to_join_family_counseling: Answer = None
    willing_to_join_mediation: Answer = None

    married_before: Answer = None
    married_before2: Answer = None
    had_children_from_previous: Answer = None
    had_children_from_previous2: Answer = None
    applicant_home_type: str | None = None
    partner_home_type: str | None = None

    protection_order_requested: Answer = None
    protection_order_date: str | None = None
    protection_order_against: str | None = None
    protection_order_case_number: str | None = None
    protection_order_judge: str | None = None
    protection_order_given: Answer = None
    protection_order_given_date: str | None = None
    protection_order_content: str | None = None
    past_violence_reported: Answer = None
    past_violence_reported_details: str | None = None

    other_family_cases: list[FamilyCase] = Field(default_factory=list)


def _decode_optional_image(value: Any) -> Any:
    if value is None or value == "":
        return None
    return decode_image(value)


class Attachment(IntakeModel):
    """An appendix; each image is one page."""

    label: str | None = None
    description: str = ""
    images: list[bytes] = Field(default_factory=list)

    @field_validator("images", mode="before")
    @classmethod
    def decode_images(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, (str, bytes)):
            value = [value]
        return [decode_image(item) for item in value]


_GLOBAL_KEYS = set(GlobalAnswers.model_fields) | {to_camel(name) for name in GlobalAnswers.model_fields}
_CATEGORY_KEYS = ("apartments", "vehicles", "savings", "benefits", "properties", "debts")


class CaseRecord(IntakeModel):
    """A complete intake record for one family."""

    claimant: Party = Field(default_factory=Party)
    respondent: Party = Field(default_factory=Party)
    relationship_type: RelationshipType | None = None
    wedding_date: str | None = None
    selected_claims: list[ClaimType] = Field(default_factory=list)
    children: list[Child] = Field(default_factory=list)
    answers: GlobalAnswers = Field(default_factory=GlobalAnswers)

    property_answers: PropertyAnswers | None = Field(default=None, alias="property")
    custody: CustodyAnswers | None = None
    alimony: AlimonyAnswers | None = None
    divorce: DivorceAnswers | None = None
    divorce_agreement: DivorceAgreementAnswers | None = None

    client_signature: bytes | None = Field(default=None, alias="signature")
    respondent_signature: bytes | None = None
    lawyer_signature: bytes | None = None
    attachments: list[Attachment] = Field(default_factory=list)
    submitted_at: datetime | None = None

    @field_validator(
        "client_signature", "respondent_signature", "lawyer_signature", mode="before"
    )
    @classmethod
    def decode_signature(cls, value: Any) -> Any:
        return _decode_optional_image(value)

    @property
    def is_married(self) -> bool:
        return self.relationship_type is RelationshipType.MARRIED or (
            self.relationship_type is None and bool(self.wedding_date)
        )

    @property
    def marriage_date(self) -> str | None:
        return self.wedding_date or None

    @property
    def separation_date(self) -> str | None:
        if self.answers.separation_date:
            return self.answers.separation_date
        if self.property_answers and self.property_answers.separation_date:
            return self.property_answers.separation_date
        return None

    def separation_or(self, today: date) -> str:
        """Separation date when recorded, otherwise ``today`` in ISO form."""
        return self.separation_date or today.isoformat()

    def is_shared_child(self, child: Child) -> bool:
        """A child is shared unless another parent is named."""
        parent = (child.name_of_parent or "").strip()
        if not parent:
            return True
        return parent in {
            (self.claimant.full_name or "").strip(),
            (self.respondent.full_name or "").strip(),
        }

    @classmethod
    def from_intake(
        cls,
        basic_info: dict[str, Any],
        form_data: dict[str, Any] | None = None,
        *,
        selected_claims: list[str] | None = None,
        signature: Any = None,
        respondent_signature: Any = None,
        lawyer_signature: Any = None,
        attachments: list[dict[str, Any]] | None = None,
        submitted_at: Any = None,
    ) -> CaseRecord:
        """Build a record from the flat ``basicInfo`` + ``formData`` intake shape.

        ``basicInfo`` carries the claimant as ``fullName``, ``idNumber`` ...
        and the respondent with a ``2`` suffix (``fullName2`` ...).
        ``formData`` mixes the global questionnaire answers with one block per
        claim type; inventories may also sit directly at its top level.
        """
        form_data = dict(form_data or {})

        def party(suffix: str) -> dict[str, Any]:
            keys = ("fullName", "idNumber", "address", "phone", "email", "birthDate", "gender")
            return {key: basic_info.get(f"{key}{suffix}") for key in keys}

        property_block = form_data.get("property")
        if property_block is None and any(form_data.get(key) for key in _CATEGORY_KEYS):
            property_block = {key: form_data[key] for key in _CATEGORY_KEYS if key in form_data}
            for key in ("job1", "job2", "separationDate"):
                if key in form_data:
                    property_block[key] = form_data[key]

        children = form_data.get("children")
        if children is None and isinstance(property_block, dict):
            children = property_block.get("children")

        answers = {key: value for key, value in form_data.items() if key in _GLOBAL_KEYS}

        payload: dict[str, Any] = {
            "claimant": party(""),
            "respondent": party("2"),
            "relationshipType": basic_info.get("relationshipType") or None,
            "weddingDate": basic_info.get("weddingDay") or None,
            "selectedClaims": selected_claims or [],
            "children": children or [],
            "answers": answers,
            "property": property_block,
            "custody": form_data.get("custody"),
            "alimony": form_data.get("alimony"),
            "divorce": form_data.get("divorce"),
            "divorceAgreement": form_data.get("divorceAgreement"),
            "signature": signature,
            "respondentSignature": respondent_signature,
            "lawyerSignature": lawyer_signature,
            "attachments": attachments or [],
            "submittedAt": submitted_at,
        }
        return cls.model_validate(payload)
