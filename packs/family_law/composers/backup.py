"""Backup Q&A document: every intake answer, verbatim, for the lawyer's file.

Nothing here is rewritten; each value goes through
:func:`~document_engine.formatting.format_value`.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from document_engine.builders import NodeFactory
from document_engine.formatting import EMPTY_ANSWER, format_value
from document_engine.nodes import DocumentNode
from document_engine.styles import StyleConfig
from intake.models import AlimonyAnswers, CaseRecord, ClaimType, Party, PropertyItem, RelationshipType

logger = logging.getLogger("claims.composers.backup")

Rows = list[tuple[str, str]]

RELATIONSHIP_LABELS = {
    RelationshipType.MARRIED: "נשוי/ה",
    RelationshipType.COMMON_LAW: "ידועים בציבור",
    RelationshipType.SEPARATED: "פרודים",
    RelationshipType.NOT_MARRIED: "לא נשואים",
}

GLOBAL_QUESTIONS = (
    ("living_separately", "האם גרים בנפרד?"),
    ("separation_date", "תאריך הפרדה"),
    ("court_proceedings", "הליכים משפטיים"),
    ("contacted_welfare", "פנייה לרווחה"),
    ("contacted_marriage_counseling", "פנייה לייעוץ זוגי"),
    ("willing_to_join_family_counseling", "נכונות לטיפול משפחתי"),
    ("willing_to_join_mediation", "נכונות לגישור"),
)

CUSTODY_QUESTIONS = (
    ("current_living_arrangement", "מצב מגורים נוכחי"),
    ("since_when", "מאז מתי"),
    ("current_visitation_arrangement", "הסדר ביקורים נוכחי"),
    ("who_should_have_custody", "מי צריך משמורת ולמה"),
    ("requested_arrangement", "הסדר מבוקש"),
    ("why_not_other_parent", "למה לא ההורה השני"),
)

ALIMONY_QUESTIONS = (
    ("relationship_description", "תיאור מערכת יחסים"),
    ("children_living_with", "הילדים מתגוררים עם"),
    ("was_previous_alimony", "מזונות קודמים"),
    ("previous_alimony_details", "פרטי מזונות קודמים"),
    ("previous_alimony_amount", "סכום מזונות קודמים"),
    ("has_bank_accounts", "יש חשבונות בנק"),
    ("has_vehicle", "יש רכב"),
    ("vehicle_details", "פרטי רכב"),
)

DIVORCE_QUESTIONS = (
    ("relationship_description", "תיאור מערכת יחסים"),
    ("who_wants_divorce_and_why", "מי רוצה גירושין ולמה"),
    ("wedding_city", "עיר נישואין"),
    ("religious_marriage", "נישואין דתיים"),
    ("religious_council", "מועצה דתית"),
    ("police_complaints", "תלונות במשטרה"),
    ("divorce_reasons", "סיבות לגירושין"),
    ("had_previous_mediation", "גישור קודם"),
    ("previous_mediation_details", "פרטי גישור"),
    ("marriage_counseling_details", "פרטי טיפול זוגי"),
    ("ketubah_amount", "סכום כתובה"),
    ("ketubah_request", "בקשה לכתובה"),
)

AGREEMENT_QUESTIONS = (
    ("property_agreement", "הסדר רכוש"),
    ("property_custom", "פירוט רכוש"),
    ("custody_agreement", "הסדר משמורת"),
    ("custody_custom", "פירוט משמורת"),
    ("visitation_agreement", "הסדר ראייה"),
    ("visitation_custom", "פירוט הסדר ראייה"),
    ("visitation_schedule", "לוח ביקורים"),
    ("alimony_agreement", "הסדר מזונות"),
    ("alimony_amount", "סכום מזונות"),
    ("alimony_custom", "פירוט מזונות"),
    ("additional_terms", "תנאים נוספים"),
)

MONEY_FIELDS = {"alimony_amount", "previous_alimony_amount"}


def money(value: Any) -> str:
    text = format_value(value)
    return text if text == EMPTY_ANSWER else f"₪{text}"


def question_rows(model: BaseModel, questions: tuple[tuple[str, str], ...]) -> Rows:
    rows = []
    for field_name, label in questions:
        value = getattr(model, field_name)
        rows.append((label, money(value) if field_name in MONEY_FIELDS else format_value(value)))
    return rows


def alimony_list_rows(answers: AlimonyAnswers) -> Rows:
    """Needs tables and bank accounts, one numbered line per entry."""
    rows = []
    for label, needs in (("צרכי הקטינים", answers.children_needs), ("צורכי המדור", answers.household_needs)):
        if needs:
            lines = [f"{need.category or need.description or EMPTY_ANSWER}: {money(need.monthly_amount)}" for need in needs]
            rows.append((label, format_value(lines)))
    if answers.bank_accounts:
        lines = [
            " ".join(part for part in (account.bank_name, account.account_number, account.owner) if part)
            for account in answers.bank_accounts
        ]
        rows.append(("חשבונות בנק", format_value(lines)))
    return rows


def extra_rows(model: BaseModel | None) -> Rows:
    """Answers to questions the intake model does not know, labelled by key."""
    if model is None or not model.model_extra:
        return []
    return [(key, format_value(value)) for key, value in model.model_extra.items()]


class BackupComposer:
    """Builds the backup Q&A document for one intake record."""

    def __init__(self, case: CaseRecord, *, style: StyleConfig | None = None, now: datetime | None = None):
        self.case = case
        self.style = style or StyleConfig()
        self.nodes = NodeFactory(self.style)
        self.now = now or datetime.now()

    async def compose(self) -> list[DocumentNode]:
        logger.info("Generating backup Q&A document")
        document = self.build()
        logger.debug(f"Backup Q&A document has {len(document)} nodes")
        return document

    def build(self) -> list[DocumentNode]:
        nodes = self.nodes
        case = self.case
        spacing = self.style.spacing
        submitted = case.submitted_at or self.now

        document: list[DocumentNode] = [
            nodes.main_title("גיבוי מידע - תשובות מלאות"),
            nodes.body("מסמך זה מכיל את כל התשובות שהמשתמש מילא בשאלון, לצורך עיון והשלמה", after=spacing.section),
            nodes.section_header("פרטי הגשה"),
            nodes.info_line("תאריך הגשה", format_value(submitted)),
            nodes.info_line("תביעות שנבחרו", ", ".join(claim.label for claim in case.selected_claims) or EMPTY_ANSWER),
            nodes.spacer(),
            *self.table("פרטים אישיים - מבקש/ת", self.party_rows(case.claimant)),
            *self.table("פרטים אישיים - משיב/ה", self.party_rows(case.respondent)),
            *self.table("פרטי קשר", self.relationship_rows()),
        ]

        if case.children:
            document.append(nodes.section_header("ילדים"))
            for index, child in enumerate(case.children, start=1):
                rows = [
                    ("שם פרטי", format_value(child.first_name)),
                    ("שם משפחה", format_value(child.last_name)),
                    ("תעודת זהות", format_value(child.id_number)),
                    ("תאריך לידה", format_value(child.birth_date)),
                    ("כתובת", format_value(child.address)),
                    ("שם ההורה השני", format_value(child.name_of_parent)),
                ]
                if child.child_relationship:
                    rows.append(("תיאור מערכת יחסים", child.child_relationship))
                document.append(nodes.subsection_header(f"ילד/ה {index}"))
                document.extend(self.table(None, rows))

        global_rows = [
            (label, format_value(getattr(case.answers, field_name)))
            for field_name, label in GLOBAL_QUESTIONS
            if getattr(case.answers, field_name) not in (None, "")
        ]
        global_rows.extend(extra_rows(case.answers))
        document.append(nodes.section_header("שאלות כלליות"))
        if global_rows:
            document.extend(self.table(None, global_rows))

        document.extend(self.claim_sections())
        return document

    def table(self, title: str | None, rows: Rows) -> list[DocumentNode]:
        section: list[DocumentNode] = []
        if title:
            section.append(self.nodes.section_header(title))
        if rows:
            section.append(self.nodes.spacer(self.style.spacing.minimal))
            section.append(self.nodes.table(rows))
        return section

    @staticmethod
    def party_rows(party: Party) -> Rows:
        return [
            ("שם מלא", format_value(party.full_name)),
            ("מספר תעודת זהות", format_value(party.id_number)),
            ("כתובת", format_value(party.address)),
            ("טלפון", format_value(party.phone)),
            ('דוא"ל', format_value(party.email)),
            ("תאריך לידה", format_value(party.birth_date)),
            ("מגדר", "זכר" if party.gender == "male" else "נקבה"),
        ]

    def relationship_rows(self) -> Rows:
        relationship = self.case.relationship_type
        rows = [("סטטוס מערכת יחסים", RELATIONSHIP_LABELS.get(relationship, "לא צוין"))]
        if self.case.wedding_date:
            rows.append(("תאריך נישואין", format_value(self.case.wedding_date)))
        return rows

    def claim_sections(self) -> list[DocumentNode]:
        case = self.case
        selected = set(case.selected_claims)
        nodes = self.nodes
        section: list[DocumentNode] = []

        if ClaimType.PROPERTY in selected and case.property_answers:
            inventory = case.property_answers
            section.append(nodes.section_header(ClaimType.PROPERTY.label))
            rows: Rows = []
            if inventory.applicant_employment_status:
                rows.append(("מצב תעסוקתי (מבקש/ת)", format_value(inventory.applicant_employment_status)))
            if inventory.applicant_gross_salary:
                rows.append(("משכורת ברוטו (מבקש/ת)", money(inventory.applicant_gross_salary)))
            if inventory.respondent_employment_status:
                rows.append(("מצב תעסוקתי (משיב/ה)", format_value(inventory.respondent_employment_status)))
            if inventory.respondent_gross_salary:
                rows.append(("משכורת ברוטו (משיב/ה)", money(inventory.respondent_gross_salary)))
            rows.extend(extra_rows(inventory))
            section.extend(self.table(None, rows))
            section.extend(self.asset_tables("דירות", "דירה", inventory.apartments))
            section.extend(self.asset_tables("כלי רכב", "רכב", inventory.vehicles))

        blocks = (
            (ClaimType.CUSTODY, case.custody, CUSTODY_QUESTIONS),
            (ClaimType.ALIMONY, case.alimony, ALIMONY_QUESTIONS),
            (ClaimType.DIVORCE, case.divorce, DIVORCE_QUESTIONS),
            (ClaimType.DIVORCE_AGREEMENT, case.divorce_agreement, AGREEMENT_QUESTIONS),
        )
        for claim_type, answers, questions in blocks:
            if claim_type not in selected or answers is None:
                continue
            rows = question_rows(answers, questions)
            if isinstance(answers, AlimonyAnswers):
                rows.extend(alimony_list_rows(answers))
            rows.extend(extra_rows(answers))
            section.extend(self.table(claim_type.label, rows))
        return section

    def asset_tables(self, header: str, noun: str, items: list[PropertyItem]) -> list[DocumentNode]:
        if not items:
            return []
        section: list[DocumentNode] = [self.nodes.subsection_header(header)]
        for index, item in enumerate(items, start=1):
            rows = [
                (f"{noun} {index} - תיאור", format_value(item.description)),
                ("שווי", money(item.value)),
                ("בעלים", format_value(item.owner)),
                ("תאריך רכישה", format_value(item.purchase_date)),
            ]
            section.extend(self.table(None, rows))
        return section
