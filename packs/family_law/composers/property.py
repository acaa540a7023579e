"""Property claim (תביעה רכושית): balancing of the parties' resources."""

from __future__ import annotations

import logging

from document_engine.aggregation import CategorySummary, aggregate_inventory, format_amount
from document_engine.formatting import RLM, format_date, or_not_specified
from document_engine.nodes import DocumentNode
from document_engine.remedies import build_property_remedies, check_income_disparity, number_remedies
from intake.models import ClaimType, PropertyAnswers
from packs.family_law.composers.base import BaseComposer

logger = logging.getLogger("claims.composers.property")

MATRIMONIAL_PROPERTY_LAW = 'חוק יחסי ממון בין בני זוג התשל"ג - 1973'
SHARED_PROPERTY_DOCTRINE = "חוק הלכת שיתוף"

COURT_FEE = '590₪. לפי תקנה א2 לתוספת הראשונה לתקנות בית המשפט לענייני משפחה (אגרות), תשנ"ו-1995.'
JURISDICTION = "המדובר בענייני משפחה ובבני משפחה לפי חוק בית המשפט לענייני משפחה, תשנ״ה – 1995."


def applicable_law(is_married: bool) -> str:
    return MATRIMONIAL_PROPERTY_LAW if is_married else SHARED_PROPERTY_DOCTRINE


def employment_line(name: str, status: str | None, employer: str | None, salary: str | None, income: str | None) -> str:
    """One party's employment, e.g. ``name: שכיר/ה, מועסק/ת אצל X, שכר ברוטו: 12,000 ₪``."""
    text = f"{name}: "
    if status == "employee":
        text += "שכיר/ה"
        if employer:
            text += f", מועסק/ת אצל {employer}"
        if salary:
            text += f", שכר ברוטו: {format_amount(salary)} ₪"
    elif status == "selfEmployed":
        text += "עצמאי/ת"
        if income:
            text += f", הכנסה ברוטו: {format_amount(income)} ₪"
    elif status == "unemployed":
        text += "לא עובד/ת כיום"
    return text


class PropertyClaimComposer(BaseComposer):
    claim_type = ClaimType.PROPERTY
    form_nature = "רכושית, איזון משאבים"
    poa_claim_text = "תביעת רכושית, איזון משאבים"

    @property
    def inventory(self) -> PropertyAnswers:
        return self.case.property_answers or PropertyAnswers()

    async def build(self) -> list[DocumentNode]:
        nodes = self.nodes
        law = applicable_law(self.case.is_married)
        remedy_request = (
            f"בית המשפט הנכבד מתבקש לעשות שימוש בסמכותו לפי {law} ולקבוע, בין היתר, כי כל "
            f"הרכוש יחולק בחלוקה שווה. כמו גם ליתן כל סעד כמבוקש בסיפא של תביעה זאת.{RLM}"
        )

        document: list[DocumentNode] = [
            *self.court_header(),
            nodes.main_title("כתב תביעה"),
            nodes.bold_line(f"מהות התביעה: רכושית, איזון משאבים.{RLM}", after=self.spacing.line),
            nodes.labeled_line("שווי נושא התובענה", f"סכום לא קצוב.{RLM}"),
            nodes.labeled_line("סכום אגרת בית משפט", f"{COURT_FEE}{RLM}", after=self.spacing.paragraph),
            nodes.labeled_line("הסעדים המבוקשים", remedy_request, after=self.spacing.paragraph),
            *self.summons(),
            *self.main_arguments(law, remedy_request),
            *self.detailed_facts(),
            *self.remedies(),
            *self.client_signature(),
        ]
        document.extend(self.closing_documents(self.statement_of_details()))
        return document

    def main_arguments(self, law: str, remedy_request: str) -> list[DocumentNode]:
        nodes = self.nodes
        case = self.case
        married = "נישאו" if case.is_married else "לא נישאו"
        description = (
            f"{case.claimant.full_name or self.claimant.name} מ״ז {or_not_specified(case.claimant.id_number)} "
            f"ו{case.respondent.full_name or self.respondent.name} מ״ז {or_not_specified(case.respondent.id_number)} "
            f"היו במערכת יחסים ו{married}"
        )
        if case.children:
            description += f", במהלך הקשר נולדו להם {len(case.children)} קטינים."
        else:
            description += "."

        return [
            nodes.section_header(f"ב. עיקר הטענות:{RLM}"),
            nodes.numbered_header("1. תיאור תמציתי של בעלי הדין"),
            nodes.body(description),
            *self.child_bullets(case.children),
            nodes.numbered_header("2. פירוט הסעד המבוקש באופן תמציתי"),
            nodes.body(remedy_request),
            nodes.numbered_header("3. תמצית העובדות הנחוצות לביסוסה של עילת התביעה ומתי נולדה"),
            nodes.body(f"המשטר הרכושי החל על בני הזוג הינו {law}."),
            nodes.body(f"כבוד בית המשפט מתבקש לאזן הרכוש שווה בשווה לפי {law}."),
            nodes.numbered_header("4. פירוט העובדות המקנות סמכות לבית המשפט"),
            nodes.body(JURISDICTION, after=self.spacing.section),
        ]

    def detailed_facts(self) -> list[DocumentNode]:
        nodes = self.nodes
        return [
            nodes.section_header(f"חלק ג - פירוט העובדות המבססות את טענות {self.claimant.title}"),
            *self.relationship_section(),
            nodes.subsection_header("הרכוש"),
            *self.property_section(),
            nodes.subsection_header("השתכרות הצדדים"),
            *self.employment_section(),
            nodes.subsection_header("היום הקובע"),
            nodes.body(
                f"היום הקובע לענייננו הוא מועד הפירוד: {format_date(self.case.separation_or(self.today))}"
            ),
        ]

    def property_section(self) -> list[DocumentNode]:
        summaries = aggregate_inventory(self.inventory)
        if not summaries:
            return [self.nodes.body("לא צוינו נכסים")]
        section: list[DocumentNode] = []
        for summary in summaries:
            section.extend(self.category_section(summary))
        return section

    def category_section(self, summary: CategorySummary) -> list[DocumentNode]:
        nodes = self.nodes
        is_debt = summary.spec.is_debt
        section: list[DocumentNode] = [
            nodes.subsection_header(summary.spec.header),
            nodes.bold_line(summary.total_line()),
        ]
        if summary.needs_breakdown:
            section.append(nodes.bold_line(summary.breakdown_label()))
            section.extend(nodes.bullet(group.line(is_debt)) for group in summary.ordered_groups())
            section.append(nodes.body("", after=self.spacing.line))
        section.extend(
            nodes.numbered_item(number, line) for number, line in enumerate(summary.item_lines(), start=1)
        )
        return section

    def employment_section(self) -> list[DocumentNode]:
        inventory = self.inventory
        case = self.case
        has_claimant = any(
            (
                inventory.applicant_employment_status,
                inventory.applicant_employer,
                inventory.applicant_gross_salary,
                inventory.applicant_gross_income,
            )
        )
        has_respondent = any(
            (
                inventory.respondent_employment_status,
                inventory.respondent_employer,
                inventory.respondent_gross_salary,
                inventory.respondent_gross_income,
            )
        )
        if not has_claimant and not has_respondent:
            return [self.nodes.body("פרטי תעסוקה לא צוינו")]

        section: list[DocumentNode] = []
        if has_claimant:
            section.append(
                self.nodes.body(
                    employment_line(
                        case.claimant.full_name or self.claimant.name,
                        inventory.applicant_employment_status,
                        inventory.applicant_employer,
                        inventory.applicant_gross_salary,
                        inventory.applicant_gross_income,
                    )
                )
            )
        if has_respondent:
            section.append(
                self.nodes.body(
                    employment_line(
                        case.respondent.full_name or self.respondent.name,
                        inventory.respondent_employment_status,
                        inventory.respondent_employer,
                        inventory.respondent_gross_salary,
                        inventory.respondent_gross_income,
                    )
                )
            )
        return section

    def remedies(self) -> list[DocumentNode]:
        inventory = self.inventory
        disparity = check_income_disparity(
            inventory.salary(),
            inventory.salary(respondent=True),
            self.claimant,
            self.respondent,
            threshold=self.settings.income_disparity_threshold,
        )
        if disparity.has_disparity:
            logger.info(f"Income disparity of {disparity.ratio:.2f}, adding unequal-division remedy")
        remedies = build_property_remedies(self.claimant, self.respondent, disparity)
        return [
            self.nodes.section_header("סעדים"),
            self.nodes.body(f"אשר על כן מתבקש בית המשפט הנכבד:{RLM}"),
            *(self.nodes.numbered_item(number, text) for number, text in number_remedies(remedies)),
        ]
