"""Divorce agreement (הסכם גירושין) signed by both spouses.

Unlike the claims, the agreement has no court header. Its terms are lettered
sections whose letters follow the sections actually present: custody only
appears when there are minors, additional terms only when some were given.
"""

from __future__ import annotations

import logging
from datetime import date

from document_engine.aggregation import format_amount
from document_engine.formatting import (
    NOT_SPECIFIED,
    RLM,
    format_date,
    hebrew_label,
    or_not_specified,
    parse_date,
    yes_no,
)
from document_engine.gender import GenderedTerms, Terminology
from document_engine.nodes import Alignment, DocumentNode
from intake.models import Child, ClaimType, DivorceAgreementAnswers, Party
from packs.family_law.composers import shared
from packs.family_law.composers.base import BaseComposer

logger = logging.getLogger("claims.composers.divorce_agreement")

AGREEMENT_PAGES = 3
BLANK_DATE = "__________"

PROPERTY_TERMS = {
    "referenceClaim": "חלוקת הרכוש המשותף בין בני הזוג תתבצע כמפורט בתביעה הרכושית הנפרדת שהוגשה לבית המשפט.",
    "eachKeepsOwn": "בני הזוג הסכימו כי כל צד שומר על הרכוש שברשותו ולא תהיה כל תביעה רכושית הדדית בין הצדדים.",
    "equalSplit": (
        "בני הזוג הסכימו על חלוקה שווה של כל הרכוש המשותף שנצבר במהלך הנישואין, לרבות נכסים, "
        "כלי רכב, חשבונות בנק וזכויות סוציאליות."
    ),
}
DEFAULT_PROPERTY_TERM = "בני הזוג הסכימו על הסדר חלוקת רכוש על-פי תנאים שהוסכמו ביניהם."

VISITATION_TERMS = {
    "referenceClaim": "הסדרי הראייה יהיו כמפורט בתביעת המשמורת הנפרדת.",
    "flexible": "הסדרי הראייה יהיו גמישים ויתואמו בהסכמה בין ההורים, תוך שמירה על טובת הקטינים.",
    "fixed": "הסדרי הראייה יהיו קבועים ויתואמו מראש בין ההורים, על מנת לשמור על יציבות עבור הקטינים.",
}

ALIMONY_REFERENCE = "הסדרי המזונות יהיו כמפורט בתביעת המזונות הנפרדת שהוגשה לבית המשפט."
NO_ALIMONY = "בני הזוג הסכימו כי אין חיוב במזונות בין הצדדים, וכל צד מוותר על כל תביעת מזונות כלפי האחר."
DEFAULT_ALIMONY_TERM = "בני הזוג הסכימו על הסדר מזונות על-פי תנאים שהוסכמו ביניהם."

GENERAL_PROVISIONS = (
    "בני הזוג מוותרים בזאת באופן סופי ובלתי חוזר על כל טענה, תביעה או זכות שיש או שתהיה לאחד "
    "כלפי השני, למעט האמור במפורש בהסכם זה.",
    "הסכם זה ממצה את כל ההסכמות בין הצדדים בנושא הגירושין, ואין כל הסכם אחר, בכתב או בעל-פה, "
    "אשר לא נכלל בהסכם זה.",
    "כל שינוי בהסכם זה יהיה תקף רק אם ייעשה בכתב ויחתם על-ידי שני הצדדים.",
    "הסכם זה כפוף לאישור בית המשפט לענייני משפחה ו/או בית הדין הרבני, לפי העניין.",
)


def marriage_duration(wedding_date: str | None, today: date) -> str:
    """`` (נישואים בני N שנים)`` by calendar years, or ``""`` under one year."""
    wedding = parse_date(wedding_date)
    if wedding is None:
        return ""
    years = today.year - wedding.year
    if years <= 0:
        return ""
    if years == 1:
        return " (נישואים בני שנה)"
    return f" (נישואים בני {years} שנים)"


def spouse_term(terms: GenderedTerms) -> str:
    return "בעל" if terms.is_male else "אישה"


class DivorceAgreementComposer(BaseComposer):
    claim_type = ClaimType.DIVORCE_AGREEMENT
    terminology = Terminology.PETITION
    form_nature = "הסכם גירושין בהסכמה"
    poa_claim_text = "הסכם גירושין"

    @property
    def answers(self) -> DivorceAgreementAnswers:
        return self.case.divorce_agreement or DivorceAgreementAnswers()

    @property
    def male_plural(self) -> bool:
        """Plural forms are masculine unless both spouses are women."""
        return self.claimant.is_male or self.respondent.is_male

    def plural(self, masculine: str, feminine: str) -> str:
        return masculine if self.male_plural else feminine

    @property
    def names(self) -> tuple[str, str]:
        return (
            self.case.claimant.full_name or self.claimant.name,
            self.case.respondent.full_name or self.respondent.name,
        )

    def selected(self, claim_type: ClaimType) -> bool:
        return claim_type in self.case.selected_claims

    async def build(self) -> list[DocumentNode]:
        nodes = self.nodes
        answers = self.answers
        minors = self.minors
        first, second = self.names

        # Every custom field is rewritten in one concurrent batch.
        property_text, custody_text, visitation_text, alimony_text, additional = await self.rewrite(
            self.request(
                answers.property_custom if answers.property_agreement == "custom" else None,
                "חלוקת רכוש",
                "תיאור ההסכמה על חלוקת הרכוש המשותף",
            ),
            self.request(
                answers.custody_custom if minors and answers.custody_agreement == "custom" else None,
                "הסדר משמורת",
                "תיאור ההסכמה על משמורת הקטינים",
            ),
            self.request(
                answers.visitation_custom if minors and answers.visitation_agreement == "custom" else None,
                "הסדרי ראייה",
                "תיאור הסדרי הראייה המוסכמים",
            ),
            self.request(
                answers.alimony_custom if answers.alimony_agreement == "custom" else None,
                "הסדר מזונות",
                "תיאור ההסכמה על מזונות",
            ),
            self.request(answers.additional_terms, "תנאים נוספים", "תיאור הסכמות נוספות כגון ביטוחים, הוצאות, ירושה"),
        )

        document: list[DocumentNode] = [nodes.main_title("הסכם גירושין"), *self.parties(minors)]
        wedding = format_date(self.case.marriage_date) or BLANK_DATE
        duration = marriage_duration(self.case.marriage_date, self.today)
        document.extend(
            [
                nodes.section_header("פתיח"),
                nodes.body(f"{first} ו{second} נישאו ביום {wedding}{duration}."),
                nodes.body(shared.relationship_narrative(self.case, self.claimant)),
                nodes.body(
                    f"בני הזוג {self.plural('המסכימים', 'המסכימות')} בזאת להתגרש בהסכמה ולסיים את חיי "
                    "הנישואין המשותפים ביניהם.",
                    after=self.spacing.section,
                ),
                nodes.section_header("תנאי ההסכם"),
                nodes.body(
                    "בני הזוג הגיעו להסכמות הבאות בכל הנושאים הקשורים לגירושיהם, והם "
                    f"{self.plural('מצהירים', 'מצהירות')} כי הסכמות אלה נעשו מרצון חופשי, ללא כפייה או "
                    "לחץ, ומתוך הבנה מלאה של המשמעויות המשפטיות של ההסכם."
                ),
            ]
        )

        sections: list[tuple[str, list[str]]] = [("חלוקת רכוש", [self.property_term(property_text)])]
        if minors:
            sections.append(("משמורת והסדרי ראייה", self.custody_terms(minors, custody_text, visitation_text)))
        if minors or answers.alimony_agreement:
            sections.append(("מזונות", [self.alimony_term(alimony_text)]))
        if additional:
            sections.append(("תנאים נוספים", [additional]))
        sections.append(("הוראות כלליות", list(GENERAL_PROVISIONS)))
        logger.debug(f"Agreement has {len(sections)} lettered sections")

        for index, (title, paragraphs) in enumerate(sections):
            document.append(nodes.subsection_header(f"סעיף {hebrew_label(index)} - {title}"))
            if len(paragraphs) == 1:
                document.append(nodes.body(paragraphs[0]))
            else:
                document.extend(nodes.numbered_item(number, text) for number, text in enumerate(paragraphs, start=1))

        document.extend(self.declarations())
        document.extend(self.signatures())
        if self.case.lawyer_signature:
            document.extend(self.lawyer_confirmation())
        document.extend(self.closing_documents(self.statement_of_details()))
        return document

    def parties(self, minors: list[Child]) -> list[DocumentNode]:
        nodes = self.nodes
        section: list[DocumentNode] = []
        for heading, party in (("בין:", self.case.claimant), ("לבין:", self.case.respondent)):
            section.extend(
                [
                    nodes.centered_title(heading, self.style.sizes.heading_2),
                    nodes.info_line("שם מלא", or_not_specified(party.full_name)),
                    nodes.info_line("ת.ז", or_not_specified(party.id_number)),
                    nodes.info_line("כתובת", or_not_specified(party.address), after=self.spacing.paragraph),
                ]
            )
        if minors:
            section.append(nodes.bold_line(f"בעניין {'הקטין/ה' if len(minors) == 1 else 'הקטינים'}:"))
            section.extend(nodes.bullet(shared.child_naturally(child)) for child in minors)
            section.append(nodes.spacer())
        return section

    def property_term(self, custom: str) -> str:
        agreement = self.answers.property_agreement
        if agreement == "referenceClaim" and not self.selected(ClaimType.PROPERTY):
            return DEFAULT_PROPERTY_TERM
        if agreement == "custom":
            return custom or DEFAULT_PROPERTY_TERM
        return PROPERTY_TERMS.get(agreement or "", DEFAULT_PROPERTY_TERM)

    def custody_terms(self, minors: list[Child], custody_custom: str, visitation_custom: str) -> list[str]:
        answers = self.answers
        first, second = self.names
        children = "הקטין/ה" if len(minors) == 1 else "הקטינים"
        custody = {
            "jointCustody": f"בני הזוג הסכימו על משמורת משותפת על {children}.",
            "applicantCustody": f"בני הזוג הסכימו כי משמורת מלאה על {children} תהיה ל{first}.",
            "respondentCustody": f"בני הזוג הסכימו כי משמורת מלאה על {children} תהיה ל{second}.",
        }
        if self.selected(ClaimType.CUSTODY):
            custody["referenceClaim"] = (
                "הסדרי המשמורת על הקטינים יהיו כמפורט בתביעת המשמורת הנפרדת שהוגשה לבית המשפט."
            )

        terms = []
        if answers.custody_agreement == "custom":
            if custody_custom:
                terms.append(custody_custom)
        elif answers.custody_agreement in custody:
            terms.append(custody[answers.custody_agreement])

        visitation = answers.visitation_agreement
        if visitation == "referenceClaim" and not self.selected(ClaimType.CUSTODY):
            visitation = None
        if visitation == "custom" and visitation_custom:
            terms.append(visitation_custom)
        elif visitation in VISITATION_TERMS:
            terms.append(VISITATION_TERMS[visitation])
        elif answers.visitation_schedule:
            terms.append(f"הסדרי הראייה: {answers.visitation_schedule}")
        return terms or ["בני הזוג הסכימו על הסדרי משמורת וראייה על-פי תנאים שהוסכמו ביניהם."]

    def alimony_term(self, custom: str) -> str:
        answers = self.answers
        agreement = answers.alimony_agreement
        if agreement == "referenceClaim" and self.selected(ClaimType.ALIMONY):
            return ALIMONY_REFERENCE
        if agreement == "specificAmount" and answers.alimony_amount:
            pays = "ישלם" if self.respondent.is_male else "תשלם"
            return (
                f"בני הזוג הסכימו כי {self.names[1]} {pays} מזונות בסך "
                f"₪{format_amount(answers.alimony_amount)} לחודש."
            )
        if agreement == "none":
            return NO_ALIMONY
        if agreement == "custom" and custom:
            return custom
        return DEFAULT_ALIMONY_TERM

    def declarations(self) -> list[DocumentNode]:
        nodes = self.nodes
        first, second = self.names
        declare = self.plural("מצהירים", "מצהירות")
        statements = (
            f"{first} ו{second} {declare} בזאת כי הסכם זה נחתם מרצונם החופשי, ללא כל כפייה, איום או "
            "לחץ מצד כלשהו.",
            f"בני הזוג {declare} כי הם {self.plural('מבינים', 'מבינות')} את כל תנאי ההסכם ואת "
            "המשמעויות המשפטיות שלו.",
            "בני הזוג הוזהרו ונתנה להם ההזדמנות לקבל ייעוץ משפטי עצמאי טרם חתימת הסכם זה.",
            "בני הזוג מתחייבים לפעול בתום לב ליישום הסכם זה ולשתף פעולה זה עם זה לשם כך.",
        )
        return [
            nodes.section_header("הצהרות"),
            *(nodes.numbered_item(number, text) for number, text in enumerate(statements, start=1)),
        ]

    def signatures(self) -> list[DocumentNode]:
        nodes = self.nodes
        first, second = self.names
        section: list[DocumentNode] = [
            nodes.body("ולראיה באו הצדדים על החתום:", before=self.spacing.section),
            nodes.body(f"תאריך: {format_date(self.today)}", after=self.spacing.section),
        ]
        for name, terms, signature, alignment in (
            (first, self.claimant, self.case.client_signature, Alignment.START),
            (second, self.respondent, self.case.respondent_signature, Alignment.LEFT),
        ):
            section.append(nodes.bold_line(f"{name} ({spouse_term(terms)})"))
            section.append(nodes.signature_or_placeholder(signature, alignment=alignment))
        return section

    def lawyer_confirmation(self) -> list[DocumentNode]:
        nodes = self.nodes
        lawyer = self.settings.lawyer
        first, second = self.names
        return [
            nodes.page_break(),
            nodes.section_header("אישור עורך דין"),
            nodes.body(
                f'אני החתום מטה, עוה"ד {lawyer.name} מ"ר {lawyer.license_number}, מאשר בזאת כי הסכם זה '
                f"נחתם בפניי על-ידי {first} ו{second} לאחר שהוסברו להם תנאיו והשלכותיו המשפטיות."
            ),
            nodes.body("הצדדים חתמו על ההסכם מרצונם החופשי ובהבנה מלאה של תוכנו.", after=self.spacing.section),
            nodes.body(f"תאריך: {format_date(self.today)}", after=self.spacing.section),
            nodes.signature_image(self.case.lawyer_signature, 300, 150),
            nodes.left_line(f'{lawyer.name}, עו"ד'),
        ]

    def statement_of_details(self) -> list[DocumentNode]:
        """Form 3 as filed with an agreed divorce."""
        nodes = self.nodes
        case = self.case
        answers = case.answers
        section: list[DocumentNode] = [
            nodes.main_title("טופס 3"),
            nodes.centered_title("(תקנה 12)"),
            nodes.main_title("הרצאת פרטים בהסכם גירושין"),
            nodes.body(f"מהות ההסכם:{RLM} {self.form_nature}", after=self.spacing.paragraph),
            nodes.body(f"מעמדו של ממלא הטופס:{RLM} {self.claimant.title}", after=self.spacing.section),
            nodes.section_header("פרטים אישיים:"),
        ]
        parties = ((f"1. {self.claimant.title}:", case.claimant), (f"2. {self.respondent.title}:", case.respondent))
        for heading, party in parties:
            section.append(nodes.subsection_header(heading))
            section.extend(self.party_lines(party))

        section.extend(
            [
                nodes.section_header("מצב משפחתי:"),
                nodes.info_line("תאריך נישואין", format_date(case.marriage_date) or NOT_SPECIFIED),
                nodes.info_line(f"נישואים קודמים ({self.claimant.title})", yes_no(answers.married_before)),
                nodes.info_line(f"נישואים קודמים ({self.respondent.title})", yes_no(answers.married_before2)),
            ]
        )
        if case.children:
            section.append(nodes.section_header("ילדים:"))
            for child in case.children:
                section.extend(
                    [
                        nodes.subsection_header(or_not_specified(child.full_name)),
                        nodes.info_line("ת.ז", or_not_specified(child.id_number)),
                        nodes.info_line("תאריך לידה", format_date(child.birth_date) or NOT_SPECIFIED),
                        nodes.info_line("כתובת", or_not_specified(child.address)),
                    ]
                )

        section.extend(
            [
                nodes.section_header("מידע נוסף:"),
                nodes.info_line("בקשת צו הגנה", yes_no(answers.protection_order_requested)),
                nodes.info_line("אלימות בעבר", yes_no(answers.past_violence_reported)),
                nodes.info_line("פנייה לשירותי רווחה", yes_no(answers.contacted_welfare)),
                nodes.info_line("פנייה לייעוץ נישואין", yes_no(answers.contacted_marriage_counseling)),
                nodes.section_header("הצהרה"),
                nodes.body("אני מצהיר/ה בזאת כי הפרטים לעיל נכונים ומלאים."),
                nodes.body(f"תאריך: {format_date(self.today)}", after=self.spacing.section),
                nodes.signature_or_placeholder(case.client_signature, alignment=Alignment.START),
                nodes.body(f"חתימת {self.claimant.title}: {self.names[0]}"),
            ]
        )
        return section

    def party_lines(self, party: Party) -> list[DocumentNode]:
        nodes = self.nodes
        return [
            nodes.info_line("שם מלא", or_not_specified(party.full_name)),
            nodes.info_line("ת.ז", or_not_specified(party.id_number)),
            nodes.info_line("תאריך לידה", format_date(party.birth_date) or NOT_SPECIFIED),
            nodes.info_line("מען", or_not_specified(party.address)),
            nodes.info_line("טלפון", or_not_specified(party.phone)),
        ]

    def estimate_page_count(self) -> shared.PageEstimate:
        return shared.PageEstimate(
            main_document=AGREEMENT_PAGES,
            statement=shared.statement_pages(len(self.case.children)),
        )
