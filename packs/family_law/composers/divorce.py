"""Divorce claim (תביעת גירושין)."""

from __future__ import annotations

import logging

from document_engine.formatting import (
    NOT_SPECIFIED,
    RLM,
    SIGNATURE_PLACEHOLDER,
    format_date,
    is_yes,
    join_hebrew_list,
    or_not_specified,
    yes_no,
)
from document_engine.nodes import Alignment, DocumentNode
from document_engine.remedies import DIVORCE_REMEDIES, number_remedies
from intake.models import ClaimType, DivorceAnswers
from packs.family_law.composers.base import BaseComposer

logger = logging.getLogger("claims.composers.divorce")

COURT_FEE = '590₪. לפי תקנה א2 לתוספת הראשונה לתקנות בית המשפט לענייני משפחה (אגרות), תשנ"ו-1995.'
JURISDICTION = (
    "המדובר בענייני משפחה ובבני משפחה לפי חוק בית המשפט לענייני משפחה, תשנ״ה – 1995. "
    "בית המשפט לענייני משפחה מוסמך לדון בתביעות גירושין."
)

RELATED_CLAIM_LABELS = {
    ClaimType.PROPERTY: "תביעה רכושית",
    ClaimType.ALIMONY: "תביעת מזונות",
    ClaimType.CUSTODY: "תביעת משמורת",
}


def related_claims_notice(selected: list[ClaimType]) -> str | None:
    """Notice listing the claims filed in parallel, or ``None`` when there are none."""
    related = [RELATED_CLAIM_LABELS[claim] for claim in selected if claim in RELATED_CLAIM_LABELS]
    if not related:
        return None
    plural = len(related) > 1
    filed = "הוגשו" if plural else "הוגשה"
    noun = "התביעות" if plural else "תביעה"
    return (
        f"בנוסף לכתב תביעה זה {filed} במקביל {noun} {join_hebrew_list(related)} "
        "בכתבי תביעה נפרדים, המתנהלים במקביל להליך זה."
    )


class DivorceClaimComposer(BaseComposer):
    claim_type = ClaimType.DIVORCE
    form_nature = "גירושין"
    poa_claim_text = "תביעת גירושין"

    @property
    def answers(self) -> DivorceAnswers:
        return self.case.divorce or DivorceAnswers()

    @property
    def marital_status(self) -> str:
        return "נשואים" if self.case.is_married else "לא נשואים"

    async def build(self) -> list[DocumentNode]:
        nodes = self.nodes
        answers = self.answers
        background, reasons = await self.rewrite(
            self.request(
                answers.who_wants_divorce_and_why,
                "הרקע לבקשת הגירושין",
                "סיבות ורקע לבקשת הגירושין",
            ),
            self.request(answers.divorce_reasons, "עילות הגירושין", "סיבות משפטיות לגירושין"),
        )

        document: list[DocumentNode] = [
            *self.court_header(),
            nodes.main_title("כתב תביעה"),
            nodes.bold_line(f"מהות התביעה:{RLM} גירושין", after=self.spacing.line),
            nodes.labeled_line("שווי נושא התובענה", f"לא קצוב.{RLM}"),
            nodes.labeled_line("סכום אגרת בית משפט", f"{COURT_FEE}{RLM}", after=self.spacing.paragraph),
            nodes.labeled_line(
                "הסעדים המבוקשים",
                "בית המשפט הנכבד מתבקש להורות על פירוק הנישואין בין הצדדים וליתן כל סעד "
                f"כמבוקש בסיפא של תביעה זאת.{RLM}",
                after=self.spacing.paragraph,
            ),
        ]
        notice = related_claims_notice(self.case.selected_claims)
        if notice:
            document.append(nodes.body(notice))
        document.extend(self.summons())
        document.extend(self.main_arguments())
        document.extend(self.detailed_facts(background, reasons))
        document.extend(
            [
                nodes.section_header("סעדים"),
                nodes.body("אשר על כן מתבקש בית המשפט הנכבד:"),
                *(nodes.numbered_item(number, text) for number, text in number_remedies(list(DIVORCE_REMEDIES))),
            ]
        )
        document.extend(self.counsel_signature())
        document.extend(self.closing_documents(self.compact_statement()))
        return document

    def main_arguments(self) -> list[DocumentNode]:
        nodes = self.nodes
        case = self.case
        wedding = format_date(case.marriage_date)
        description = (
            f"{case.claimant.full_name or self.claimant.name} מ״ז {or_not_specified(case.claimant.id_number)} "
            f"ו{case.respondent.full_name or self.respondent.name} מ״ז {or_not_specified(case.respondent.id_number)} "
            f"הינם {self.marital_status}"
        )
        if wedding:
            description += f", נישאו ביום {wedding}"
        if case.children:
            count = len(case.children)
            description += f", ולהם {'ילד אחד' if count == 1 else f'{count} ילדים'}"
        description += "."

        wants = "מבקש" if self.claimant.is_male else "מבקשת"
        facts = f"הצדדים {self.marital_status}"
        if wedding:
            facts += f" מאז {wedding}"
        facts += (
            f". במהלך הנישואין התגוררו {self.claimant.title} ו{self.respondent.title} יחד, אך מערכת "
            f"היחסים התדרדרה עד כדי התמוטטות מוחלטת. {self.claimant.title} {wants} להתגרש "
            f"מ{self.respondent.title} מהסיבות שיפורטו בהמשך.{RLM}"
        )

        return [
            nodes.section_header(f"ב. עיקר הטענות:{RLM}"),
            nodes.numbered_header("1. תיאור תמציתי של בעלי הדין"),
            nodes.body(description),
            *self.child_bullets(case.children),
            nodes.numbered_header("2. פירוט הסעד המבוקש באופן תמציתי"),
            nodes.body(
                "בית המשפט הנכבד מתבקש להורות על פירוק הנישואין בין הצדדים ולקבוע את מלוא "
                f"הסעדים המבוקשים בתביעה זו.{RLM}"
            ),
            nodes.numbered_header("3. תמצית העובדות הנחוצות לביסוסה של עילת התביעה"),
            nodes.body(facts),
            nodes.numbered_header("4. פירוט העובדות המקנות סמכות לבית המשפט"),
            nodes.body(JURISDICTION, after=self.spacing.section),
        ]

    def detailed_facts(self, background: str, reasons: str) -> list[DocumentNode]:
        nodes = self.nodes
        answers = self.answers
        section: list[DocumentNode] = [
            nodes.section_header(f"חלק ג - פירוט העובדות המבססות את טענות {self.claimant.title}"),
            *self.relationship_section(),
        ]
        if background:
            section.extend([nodes.subsection_header("הרקע לבקשת הגירושין"), nodes.body(background)])
        if reasons:
            section.extend([nodes.subsection_header("עילות הגירושין"), nodes.body(reasons)])

        religious = yes_no(answers.religious_marriage)
        if answers.wedding_city or answers.religious_marriage not in (None, ""):
            section.append(nodes.subsection_header("פרטי הנישואין"))
            if answers.wedding_city:
                section.append(nodes.body(f"הנישואין נערכו בעיר {answers.wedding_city}."))
            if religious == "כן":
                section.append(nodes.body("הנישואין נערכו בטקס דתי."))
                if answers.religious_council:
                    section.append(nodes.body(f"הצדדים רשומים במועצה הדתית {answers.religious_council}."))
            elif religious == "לא":
                section.append(nodes.body("הנישואין לא נערכו בטקס דתי."))

        if is_yes(answers.police_complaints):
            complaint = ""
            if answers.police_complaints_who:
                complaint += f"{answers.police_complaints_who} "
            complaint += "הגיש/ה תלונות במשטרה"
            if answers.police_complaints_where:
                complaint += f" ב{answers.police_complaints_where}"
            if answers.police_complaints_date:
                complaint += f" ביום {format_date(answers.police_complaints_date)}"
            section.extend([nodes.subsection_header("תלונות במשטרה"), nodes.body(f"{complaint}.")])
            if answers.police_complaints_outcome:
                section.append(nodes.body(f"תוצאות ההליך: {answers.police_complaints_outcome}"))

        if is_yes(answers.had_previous_mediation) and answers.previous_mediation_details:
            section.extend(
                [nodes.subsection_header("נסיונות גישור קודמים"), nodes.body(answers.previous_mediation_details)]
            )

        if answers.marriage_counseling_details:
            section.extend(
                [nodes.subsection_header("טיפול משפחתי וייעוץ זוגי"), nodes.body(answers.marriage_counseling_details)]
            )

        if religious == "כן" and (answers.ketubah_amount or answers.ketubah_request):
            section.append(nodes.subsection_header("כתובה"))
            if answers.ketubah_amount:
                section.append(nodes.body(f"סכום הכתובה: {answers.ketubah_amount}"))
            if answers.ketubah_request:
                section.append(nodes.body(f"בקשה בעניין הכתובה: {answers.ketubah_request}"))
        return section

    def counsel_signature(self) -> list[DocumentNode]:
        nodes = self.nodes
        lawyer_line = f'עו"ד {self.settings.lawyer.name}'
        section: list[DocumentNode] = [nodes.body("", before=self.spacing.section, after=self.spacing.line)]
        if self.case.lawyer_signature:
            section.extend(
                [
                    nodes.body("חתימת בא כוח: ", after=self.spacing.minimal),
                    nodes.signature_image(self.case.lawyer_signature, 200, 80, Alignment.START),
                ]
            )
        else:
            section.append(nodes.body(SIGNATURE_PLACEHOLDER, after=self.spacing.minimal))
        section.append(nodes.body(lawyer_line, after=self.spacing.section))
        return section

    def compact_statement(self) -> list[DocumentNode]:
        """Short statement of details used with divorce claims."""
        nodes = self.nodes
        case = self.case
        answers = self.answers
        global_answers = case.answers
        separation = format_date(case.separation_date)

        section: list[DocumentNode] = [
            nodes.centered_title("טופס 3 - הרצאת פרטים", self.style.sizes.section),
            nodes.numbered_header("1. פרטי הצדדים"),
        ]
        for terms, party in ((self.claimant, case.claimant), (self.respondent, case.respondent)):
            section.extend(
                [
                    nodes.body(
                        f"{terms.title}: {party.full_name or terms.name}, ת.ז {or_not_specified(party.id_number)}"
                    ),
                    nodes.body(f"כתובת: {or_not_specified(party.address)}"),
                    nodes.body(f"טלפון: {or_not_specified(party.phone)}"),
                    nodes.body(f'דוא"ל: {or_not_specified(party.email)}'),
                ]
            )
            if party is case.claimant:
                section.append(nodes.spacer(self.spacing.line))

        section.extend(
            [
                nodes.numbered_header("2. מצב משפחתי"),
                nodes.body(f"סטטוס נישואין: {self.marital_status}"),
            ]
        )
        if case.marriage_date:
            section.append(nodes.body(f"תאריך נישואין: {format_date(case.marriage_date)}"))
        if answers.wedding_city:
            section.append(nodes.body(f"מקום הנישואין: {answers.wedding_city}"))
        if separation:
            section.append(nodes.body(f"תאריך הפרדה: {separation}"))

        section.append(nodes.numbered_header("3. ילדים"))
        if case.children:
            section.append(nodes.body(f"מספר ילדים: {len(case.children)}"))
            for index, child in enumerate(case.children, start=1):
                section.extend(
                    [
                        nodes.body(f"ילד {index}:"),
                        nodes.body(f"שם: {child.full_name}"),
                        nodes.body(f"ת.ז: {or_not_specified(child.id_number)}"),
                        nodes.body(f"תאריך לידה: {format_date(child.birth_date) or NOT_SPECIFIED}"),
                        nodes.body(f"כתובת: {or_not_specified(child.address)}"),
                    ]
                )
        else:
            section.append(nodes.body("אין ילדים משותפים."))

        section.extend(
            [
                nodes.numbered_header("4. מגורים"),
                nodes.body(f"האם גרים בנפרד: {'כן' if is_yes(global_answers.living_separately) else 'לא'}"),
            ]
        )
        if separation:
            section.append(nodes.body(f"תאריך הפרדה: {separation}"))

        if is_yes(answers.police_complaints):
            who = " ".join(part for part in (answers.police_complaints_who, answers.police_complaints_where) if part)
            violence = f"הוגשו תלונות במשטרה: {who}".strip()
        else:
            violence = "לא הוגשו תלונות במשטרה."
        proceedings = (
            "קיימים הליכים משפטיים נוספים."
            if is_yes(global_answers.court_proceedings)
            else "לא קיימים הליכים משפטיים נוספים."
        )
        treatment = (
            "הצדדים פנו לגורמים טיפוליים."
            if is_yes(global_answers.contacted_welfare) or is_yes(global_answers.contacted_marriage_counseling)
            else "הצדדים לא פנו לגורמים טיפוליים."
        )
        section.extend(
            [
                nodes.numbered_header("5. אלימות במשפחה"),
                nodes.body(violence),
                nodes.numbered_header("6. הליכים משפטיים נוספים"),
                nodes.body(proceedings),
                nodes.numbered_header("7. פניה לגורמים טיפוליים"),
                nodes.body(treatment),
                nodes.numbered_header("8. הצהרה"),
                nodes.body(
                    f'אני הח"מ, {case.claimant.full_name or self.claimant.name}, מצהיר/ה בזאת כי כל הפרטים '
                    "שמסרתי לעיל הינם נכונים ומדויקים למיטב ידיעתי."
                ),
                nodes.body("", before=self.spacing.section, after=self.spacing.line),
            ]
        )

        if case.client_signature:
            section.extend(
                [
                    nodes.body("חתימה: ", after=self.spacing.minimal),
                    nodes.signature_image(case.client_signature, 200, 80, Alignment.START),
                    nodes.body(case.claimant.full_name or self.claimant.name, after=self.spacing.minimal),
                ]
            )
        else:
            section.append(nodes.body(f"חתימה: {SIGNATURE_PLACEHOLDER}", after=self.spacing.minimal))
        section.append(nodes.body(f"תאריך: {format_date(self.today)}"))
        return section
