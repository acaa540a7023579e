"""Alimony claim (תביעת מזונות) for the minor children.

Besides the usual claim sections the document carries two needs tables: the
children's monthly needs split evenly per minor, and the household (מדור)
needs. The statement of details is Form 4 rather than Form 3.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from document_engine.aggregation import coerce_int, format_amount
from document_engine.formatting import (
    NOT_SPECIFIED,
    RLM,
    format_date,
    format_number,
    is_yes,
    or_not_specified,
    yes_no,
)
from document_engine.gender import GenderedTerms
from document_engine.nodes import Alignment, DocumentNode
from document_engine.remedies import ALIMONY_REMEDIES, number_remedies
from intake.models import AlimonyAnswers, Child, ClaimType, NeedItem, PropertyAnswers
from packs.family_law.composers import shared
from packs.family_law.composers.base import BaseComposer

logger = logging.getLogger("claims.composers.alimony")

COURT_FEE = '361 ₪ לפי סעיף 6ב לתוספת הראשונה לתקנות בית המשפט לענייני משפחה (אגרות), תשנ"ו-1995.'
JURISDICTION = "מדובר בבני זוג ובילדיהם שהסמכות נתונה לבית המשפט לענייני משפחה."
FORM_4_NOTICE = (
    "אם יש בדעתך להתגונן, אתה מוזמן להגיש כתב הגנה לתובענה, יחד עם הרצאת פרטים לפי טופס 4 "
    'שבתוספת הראשונה לתקנות בית משפט לענייני משפחה (סדרי דין), התשפ"א-2020.'
)

# Main claim pages before the needs tables grow with the children.
BASE_CLAIM_PAGES = 5

# Where the children live, as answered in the alimony questionnaire, mapped to
# the arrangements the relationship narrative knows.
LIVING_ARRANGEMENTS = {
    "with_applicant": "with_applicant",
    "applicant": "with_applicant",
    "with_respondent": "with_respondent",
    "respondent": "with_respondent",
    "split": "split",
    "both": "split",
    "still_together": "together",
    "together": "together",
}

CATEGORY_HEADER = "קטגוריה"
TOTAL_LABEL = 'סה"כ'


def shekels(value: Any) -> str:
    if isinstance(value, int):
        return f"₪{format_number(value)}"
    return f"₪{format_amount(value)}"


def split_evenly(total: int, count: int) -> int:
    """Share of ``total`` per child, rounded half up."""
    return (2 * total + count) // (2 * count)


def monthly_amount(need: NeedItem) -> int:
    return max(coerce_int(need.monthly_amount), 0)


def children_needs_total(needs: list[NeedItem], count: int) -> int:
    """Total of the children's needs as the table prints it (per-child share times children)."""
    if not count:
        return sum(monthly_amount(need) for need in needs)
    return split_evenly(sum(monthly_amount(need) for need in needs), count) * count


def children_needs_rows(minors: list[Child], needs: list[NeedItem]) -> list[tuple[str, ...]]:
    """Category, one column per minor, then the row total; the last row holds the totals."""
    count = len(minors)
    names = [child.full_name or f"ילד/ה {index}" for index, child in enumerate(minors, start=1)]
    rows: list[tuple[str, ...]] = [(CATEGORY_HEADER, *names, TOTAL_LABEL)]
    for need in needs:
        share = split_evenly(monthly_amount(need), count)
        label = need.category or need.description or NOT_SPECIFIED
        rows.append((label, *([shekels(share)] * count), shekels(share * count)))
    grand = split_evenly(sum(monthly_amount(need) for need in needs), count)
    rows.append((TOTAL_LABEL, *([shekels(grand)] * count), shekels(grand * count)))
    return rows


def children_column_widths(count: int) -> tuple[int, ...]:
    return (33, *([52 // count] * count), 15)


def household_needs_rows(needs: list[NeedItem]) -> list[tuple[str, ...]]:
    rows: list[tuple[str, ...]] = [(CATEGORY_HEADER, "סכום חודשי")]
    for need in needs:
        rows.append((need.category or need.description or NOT_SPECIFIED, shekels(monthly_amount(need))))
    rows.append((TOTAL_LABEL, shekels(sum(monthly_amount(need) for need in needs))))
    return rows


class AlimonyClaimComposer(BaseComposer):
    claim_type = ClaimType.ALIMONY
    form_nature = "מזונות"
    poa_claim_text = "תביעת מזונות"

    @property
    def answers(self) -> AlimonyAnswers:
        return self.case.alimony or AlimonyAnswers()

    @property
    def inventory(self) -> PropertyAnswers:
        return self.case.property_answers or PropertyAnswers()

    @property
    def arrangement(self) -> str | None:
        return LIVING_ARRANGEMENTS.get(self.answers.children_living_with or "")

    async def build(self) -> list[DocumentNode]:
        nodes = self.nodes
        minors = self.minors
        honored = "מתכבד" if self.claimant.is_male else "מתכבדת"
        (relationship,) = await self.rewrite(
            self.request(self.answers.relationship_description, "תיאור מערכת היחסים")
        )

        document: list[DocumentNode] = [
            *self.court_header(minors=minors),
            nodes.main_title("כתב תביעה"),
            nodes.body(
                f"{self.claimant.title} {honored} להגיש לכבוד בית המשפט את כתב התביעה בעניין מזונות הקטינים.",
                after=self.spacing.paragraph,
            ),
            nodes.labeled_line("סכום אגרת בית משפט", COURT_FEE, after=self.spacing.subsection),
            *self.summons(),
            *self.claim_summary(minors),
            nodes.section_header("חלק ג - פירוט העובדות המשמשות יסוד לכתב הטענות"),
            *self.relationship_section(minors, self.arrangement),
        ]
        if relationship:
            document.append(nodes.body(relationship))
        document.extend(self.employment_section(self.respondent, respondent=True))
        document.extend(self.employment_section(self.claimant, respondent=False))
        document.extend(self.children_needs_section(minors))
        document.extend(self.household_needs_section())
        document.extend(
            [
                nodes.section_header("סעדים"),
                *(nodes.numbered_item(number, text) for number, text in number_remedies(list(ALIMONY_REMEDIES))),
            ]
        )
        document.extend(self.client_signature())
        document.extend(self.closing_documents(self.statement_of_details()))
        return document

    def summons(self) -> list[DocumentNode]:
        nodes = self.nodes
        title = self.claimant.title
        filed = "הגיש" if self.claimant.is_male else "הגישה"
        return [
            nodes.subsection_header("הליכים נוספים:"),
            nodes.bold_line(f"הזמנה לדין:{RLM}", after=self.spacing.paragraph),
            nodes.body(
                f"הואיל ו{title} {filed} נגדך תביעה למזונות כמפורט בכתב התביעה המצורף בזה על נספחיו.",
                after=self.spacing.paragraph,
            ),
            nodes.body(FORM_4_NOTICE, after=self.spacing.paragraph),
            nodes.body(
                "כתב ההגנה על נספחיו, יאומת בתצהיר שלך ויוגש לבית המשפט תוך 30 ימים מהיום שהומצאה "
                f"לך הזמנה זו, לפי {shared.SUMMONS_REGULATION}.",
                after=self.spacing.paragraph,
            ),
            nodes.body(
                f"אם לא תעשה כן, תהיה ל{title} הזכות לקבל פסק דין שלא בפניך, לפי "
                f"{shared.DEFAULT_JUDGMENT_REGULATION}.",
                after=self.spacing.subsection,
            ),
        ]

    def claim_summary(self, minors: list[Child]) -> list[DocumentNode]:
        nodes = self.nodes
        case = self.case
        parties = (
            f"{case.claimant.full_name or self.claimant.name} מ״ז {or_not_specified(case.claimant.id_number)} "
            f"ו{case.respondent.full_name or self.respondent.name} מ״ז {or_not_specified(case.respondent.id_number)}"
        )
        names = ", ".join(shared.child_naturally(child) for child in minors)
        noun = "קטין" if len(minors) == 1 else "קטינים"
        if case.is_married:
            description = (
                f"{parties} נישאו ביום {format_date(case.marriage_date) or NOT_SPECIFIED}, "
                f"במהלך הנישואין נולדו להם {len(minors)} {noun}"
            )
        else:
            description = f"{parties} לא נישאו, ובמהלך הקשר נולדו להם {len(minors)} {noun}"
        description += f": {names}." if names else "."
        facts = f"המדובר בזוג {parties} וילדיהם המשותפים: {names}." if names else f"המדובר בזוג {parties}."

        summary_remedies = number_remedies(list(ALIMONY_REMEDIES[:2]))
        return [
            nodes.section_header("חלק ב – תמצית התביעה"),
            nodes.numbered_header("1. תיאור תמציתי של בעלי הדין"),
            nodes.body(description, after=self.spacing.subsection),
            nodes.numbered_header("2. פירוט הסעד המבוקש באופן תמציתי"),
            *(nodes.numbered_item(number, text) for number, text in summary_remedies),
            nodes.spacer(self.spacing.subsection),
            nodes.numbered_header("3. תמצית העובדות הנחוצות לביסוסה של עילת התביעה ומתי נולדה"),
            nodes.body(facts, after=self.spacing.subsection),
            nodes.numbered_header("4. פירוט העובדות המקנות סמכות לבית המשפט"),
            nodes.body(JURISDICTION, after=self.spacing.subsection),
        ]

    def employment_lines(self, terms: GenderedTerms, *, respondent: bool) -> list[str]:
        inventory = self.inventory
        prefix = "respondent" if respondent else "applicant"
        status = getattr(inventory, f"{prefix}_employment_status")
        employer = getattr(inventory, f"{prefix}_employer")
        estimated = getattr(inventory, f"{prefix}_estimated_income")
        additional = getattr(inventory, f"{prefix}_additional_income")
        salary = inventory.salary(respondent)

        lines = []
        if employer and status != "unemployed":
            employed = "מועסק" if terms.is_male else "מועסקת"
            lines.append(f"{terms.title} {employed} אצל {employer}.")
        if salary:
            lines.append(f"משכורת ברוטו: {shekels(salary)} לחודש.")
        elif estimated:
            income = "הכנסתו" if terms.is_male else "הכנסתה"
            lines.append(f"{income} המשוערת: {shekels(estimated)} לחודש.")
        if additional:
            lines.append(f"הכנסות נוספות: {additional}")
        if not lines:
            lines.append(f"לא נמסרו פרטים על השתכרות {terms.title}.")
        return lines

    def employment_section(self, terms: GenderedTerms, *, respondent: bool) -> list[DocumentNode]:
        nodes = self.nodes
        section: list[DocumentNode] = [nodes.subsection_header(f"השתכרות {terms.title}")]
        section.extend(nodes.body(line) for line in self.employment_lines(terms, respondent=respondent))
        section.append(nodes.spacer(self.spacing.subsection))
        return section

    def children_needs_section(self, minors: list[Child]) -> list[DocumentNode]:
        needs = self.answers.children_needs
        if not needs or not minors:
            logger.debug("No children needs table: no expenses or no minor children")
            return []
        logger.debug(f"Adding children needs table for {len(minors)} children with {len(needs)} categories")
        return [
            self.nodes.subsection_header("צרכי הקטינים:"),
            self.nodes.data_table(children_needs_rows(minors, needs), children_column_widths(len(minors))),
            self.nodes.spacer(self.spacing.paragraph),
        ]

    def household_needs_section(self) -> list[DocumentNode]:
        needs = self.answers.household_needs
        if not needs:
            return []
        return [
            self.nodes.subsection_header("צורכי המדור:"),
            self.nodes.data_table(household_needs_rows(needs), (68, 32)),
            self.nodes.spacer(self.spacing.paragraph),
        ]

    # Form 4 -------------------------------------------------------------

    def living_with(self) -> str:
        case = self.case
        arrangement = self.arrangement
        if arrangement == "with_applicant":
            return case.claimant.full_name or self.claimant.title
        if arrangement == "with_respondent":
            return case.respondent.full_name or self.respondent.title
        if arrangement == "split":
            return "שני ההורים"
        if arrangement == "together":
            return "שני ההורים, תחת קורת גג אחת"
        return NOT_SPECIFIED

    def statement_of_details(self) -> list[DocumentNode]:
        """Form 4, the statement of details that accompanies an alimony claim."""
        nodes = self.nodes
        case = self.case
        answers = self.answers
        inventory = self.inventory
        minors = self.minors

        section: list[DocumentNode] = [
            nodes.main_title("הרצאת פרטים (טופס 4)"),
            nodes.centered_title("(בתביעת מזונות)"),
            nodes.body(f"מעמדו של ממלא הטופס:{RLM} {self.claimant.title}", after=self.spacing.section),
            nodes.section_header("1. פרטי הצדדים:"),
        ]
        for terms, party in ((self.claimant, case.claimant), (self.respondent, case.respondent)):
            section.extend(
                [
                    nodes.subsection_header(f"{terms.title}:"),
                    nodes.info_line("שם פרטי ושם משפחה", or_not_specified(party.full_name)),
                    nodes.info_line("מספר זהות", or_not_specified(party.id_number)),
                    nodes.info_line("תאריך לידה", format_date(party.birth_date) or NOT_SPECIFIED),
                    nodes.info_line("מען", or_not_specified(party.address)),
                    nodes.info_line("טלפון", or_not_specified(party.phone)),
                ]
            )

        section.append(nodes.section_header("2. הקטינים שבעבורם נתבעים מזונות:"))
        if minors:
            living_with = self.living_with()
            for index, child in enumerate(minors, start=1):
                section.extend(
                    [
                        nodes.subsection_header(f"קטין/ה {index}:"),
                        nodes.info_line("שם מלא", or_not_specified(child.full_name)),
                        nodes.info_line("מספר זהות", or_not_specified(child.id_number)),
                        nodes.info_line("תאריך לידה", format_date(child.birth_date) or NOT_SPECIFIED),
                        nodes.info_line("מתגורר/ת עם", living_with),
                    ]
                )
        else:
            section.append(nodes.body("אין קטינים"))

        section.extend(
            [
                nodes.section_header("3. מצב אישי:"),
                nodes.info_line("תאריך הנישואין", format_date(case.marriage_date) or NOT_SPECIFIED),
                nodes.info_line("תאריך הפירוד", format_date(case.separation_date) or NOT_SPECIFIED),
                nodes.info_line("האם הצדדים גרים בנפרד", yes_no(case.answers.living_separately)),
                nodes.section_header("4. מזונות בעבר:"),
                nodes.info_line("האם נפסקו או שולמו מזונות בעבר", yes_no(answers.was_previous_alimony)),
            ]
        )
        if is_yes(answers.was_previous_alimony):
            section.append(nodes.info_line("פרטים", or_not_specified(answers.previous_alimony_details)))
            if answers.previous_alimony_amount:
                section.append(nodes.info_line("סכום חודשי", shekels(answers.previous_alimony_amount)))

        section.append(nodes.section_header("5. הכנסות הצדדים:"))
        for terms, respondent in ((self.claimant, False), (self.respondent, True)):
            prefix = "respondent" if respondent else "applicant"
            income = inventory.salary(respondent) or getattr(inventory, f"{prefix}_estimated_income")
            additional = getattr(inventory, f"{prefix}_additional_income")
            section.extend(
                [
                    nodes.subsection_header(f"{terms.title}:"),
                    nodes.info_line("מקום עבודה", or_not_specified(getattr(inventory, f"{prefix}_employer"))),
                    nodes.info_line("הכנסה חודשית ברוטו", shekels(income) if income else NOT_SPECIFIED),
                    nodes.info_line("הכנסות נוספות", or_not_specified(additional)),
                ]
            )

        section.extend(
            [
                nodes.section_header("6. דירת המגורים:"),
                nodes.info_line(
                    f"הדירה שבה גר/ה {self.claimant.title}",
                    shared.housing_type(case.answers.applicant_home_type),
                ),
                nodes.info_line(
                    f"הדירה שבה גר/ה {self.respondent.title}",
                    shared.housing_type(case.answers.partner_home_type),
                ),
                nodes.section_header("7. חשבונות בנק:"),
                nodes.info_line("האם קיימים חשבונות בנק", yes_no(answers.has_bank_accounts)),
            ]
        )
        if is_yes(answers.has_bank_accounts):
            for account in answers.bank_accounts:
                text = f"{or_not_specified(account.bank_name)}, חשבון {or_not_specified(account.account_number)}"
                if account.owner:
                    text += f" ({account.owner})"
                section.append(nodes.bullet(text))

        section.extend(
            [
                nodes.section_header("8. רכב:"),
                nodes.info_line("האם קיים רכב", yes_no(answers.has_vehicle)),
            ]
        )
        if is_yes(answers.has_vehicle):
            section.append(nodes.info_line("פרטי הרכב", or_not_specified(answers.vehicle_details)))

        children_total = children_needs_total(answers.children_needs, len(minors))
        household_total = sum(monthly_amount(need) for need in answers.household_needs)
        section.extend(
            [
                nodes.section_header("9. צרכים חודשיים:"),
                nodes.info_line("צרכי הקטינים", shekels(children_total)),
                nodes.info_line("צורכי המדור", shekels(household_total)),
                nodes.section_header("הצהרה"),
                nodes.body("אני מצהיר כי לפי מיטב ידיעתי הפרטים שמילאתי בטופס נכונים."),
                nodes.body(
                    f"תאריך:{RLM} {format_date(self.today)}",
                    before=self.spacing.section,
                    after=self.spacing.paragraph,
                ),
                nodes.signature_or_placeholder(case.client_signature, alignment=Alignment.START),
                nodes.body(self.claimant.name),
            ]
        )
        return section

    def estimate_page_count(self) -> shared.PageEstimate:
        children = len(self.case.children)
        return shared.PageEstimate(
            main_document=BASE_CLAIM_PAGES + math.ceil(children / shared.CHILDREN_PER_FORM_PAGE),
            statement=shared.statement_pages(children),
        )
