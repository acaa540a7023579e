"""Custody claim (תביעת משמורת).

Custody claims are petitions: the parties are המבקש/ת and המשיב/ה, and only
minor children appear in the court header and in the narrative.
"""

from __future__ import annotations

import logging

from document_engine.formatting import NOT_SPECIFIED, RLM, format_date, or_not_specified
from document_engine.gender import Terminology
from document_engine.nodes import DocumentNode
from document_engine.remedies import CUSTODY_REMEDIES, number_remedies
from intake.models import Child, ClaimType, CustodyAnswers
from packs.family_law.composers.base import BaseComposer

logger = logging.getLogger("claims.composers.custody")

COURT_FEE = '388₪ לפי סעיף 6ב לתוספת הראשונה לתקנות בית המשפט לענייני משפחה (אגרות), תשנ"ו-1995.'
DEFAULT_CHILD_NAME = "הקטין/ה"

BEST_INTEREST_PRINCIPLE = (
    'כידוע, טובת הילד הוא "עיקרון העל" שמנחה את פסיקותיו של בית המשפט לענייני משפחה בכל '
    "החלטה הקשורה למצב הילד, לגורלו ועתידו החולש על ההכרעה בסוגיות הנוגעות לגורלו של הקטין "
    "לאחר פירוק התא המשפחתי בע\"א 10060/07 פלונית נ' פלוני, פסקה 28; דנ\"א 9201/08 פלוני נ' פלונית."
)
BEST_INTEREST_CITATION = (
    "על עניין עקרון טובת הילד ניתן לעמוד על מהותו ברע\"א 3411/16 פלוני נ' משרד הרווחה ירושלים, "
    "(פסקאות 18-17) וכך נכתב בפסקאות 17-18 לפסק הדין:"
)
BEST_INTEREST_QUOTE = (
    '"עיקרון טובת הילד משמיע לנו עוד מראשית פסיקתו של בית משפט זה כי הילד איננו אובייקט השייך '
    "להוריו, אלא הוא בעל אינטרסים וצרכים עצמאיים משלו [...] זהו עיקרון בעל 'רקמה פתוחה', שאליה "
    "יוצקים בתי המשפט הדנים בעניינם של קטינים תוכן בהתאם לנסיבות המקרה. הוא 'נשקל בקפידה על ידי "
    "מעגלים שונים של שיקולים שבמרכזם הקטין. שיקולים חומריים-פיזיים-טבעיים, שיקולים רוחניים "
    "חברתיים, אתיים-מוסריים, שיקולי בריאות ושיקולים נפשיים, שיקולים בטווח המיידי ושיקולים לעתיד "
    "לבוא' [...] ההכרעה מה יטיב עם הקטין היא מורכבת וסבוכה. זוהי מלאכה עדינה הדורשת איזון בין "
    'מכלול האינטרסים והפרמטרים של צרכי הקטין".'
)


class CustodyClaimComposer(BaseComposer):
    claim_type = ClaimType.CUSTODY
    terminology = Terminology.PETITION
    form_nature = "משמורת"
    poa_claim_text = "תביעת משמורת"

    @property
    def answers(self) -> CustodyAnswers:
        return self.case.custody or CustodyAnswers()

    async def build(self) -> list[DocumentNode]:
        nodes = self.nodes
        minors = self.minors
        honored = "מתכבד" if self.claimant.is_male else "מתכבדת"
        remedies = number_remedies(list(CUSTODY_REMEDIES))

        document: list[DocumentNode] = [
            *self.court_header(minors=minors),
            nodes.main_title("תביעת משמורת"),
            nodes.body(
                f"{self.claimant.title} {honored} להגיש לכבוד בית המשפט את כתב התביעה בעניין משמורת הקטינים."
            ),
            nodes.labeled_line("סכום אגרת בית משפט", COURT_FEE, after=self.spacing.paragraph),
            nodes.bold_line(f"הליכים נוספים ככל שיש:{RLM}", after=self.spacing.paragraph),
            *self.summons(),
            nodes.section_header("חלק ב: עיקר הטענות"),
            nodes.numbered_header("1. תיאור תמציתי של בעלי הדין"),
            *self.parties_description(minors),
            nodes.numbered_header("2. פירוט הסעד המבוקש באופן תמציתי"),
            *(nodes.numbered_item(number, text) for number, text in remedies),
            nodes.section_header(f"חלק ג: פירוט העובדות המבססות את טענות {self.claimant.title}"),
            *(await self.facts_section(minors)),
            nodes.section_header("סעדים"),
            *(nodes.numbered_item(number, text) for number, text in remedies),
        ]
        if self.case.lawyer_signature:
            document.append(nodes.signature_image(self.case.lawyer_signature, 300, 150))
        document.extend(self.closing_documents(self.statement_of_details()))
        return document

    def parties_description(self, minors: list[Child]) -> list[DocumentNode]:
        case = self.case
        if case.is_married:
            status = f"נישאו ביום {format_date(case.marriage_date) or NOT_SPECIFIED}"
            phrase = "במהלך הנישואין נולדו להם"
        else:
            status = "לא נישאו"
            phrase = "ובמהלך הקשר נולדו להם"
        noun = "קטין" if len(minors) == 1 else "קטינים"
        description = (
            f"{self.claimant.name} מ״ז {or_not_specified(case.claimant.id_number)} ו{self.respondent.name} "
            f"מ״ז {or_not_specified(case.respondent.id_number)} {status}, {phrase} {len(minors)} {noun}."
        )
        return [self.nodes.body(description), *self.child_bullets(minors)]

    async def facts_section(self, minors: list[Child]) -> list[DocumentNode]:
        nodes = self.nodes
        answers = self.answers
        arrangement = answers.current_living_arrangement

        # Every free-text field is rewritten in one concurrent batch; results
        # are placed back by position.
        relationship_text = self.case.alimony.relationship_description if self.case.alimony else None
        children_with_text = [child for child in minors if (child.child_relationship or "").strip()]
        requests = [self.request(relationship_text, "תיאור מערכת היחסים")]
        for child in children_with_text:
            name = child.full_name or DEFAULT_CHILD_NAME
            requests.append(
                self.request(
                    child.child_relationship,
                    f"מערכת היחסים עם {name}",
                    f"תיאור מערכת היחסים של {self.claimant.title} עם הקטין/ה {name}",
                )
            )
        if arrangement == "with_applicant":
            visitation_label = f"הסדרי ראיה עם {self.respondent.title}"
        else:
            visitation_label = f"הסדרי ראיה עם {self.claimant.title}"
        visiting = arrangement in ("with_applicant", "with_respondent")
        requests.extend(
            [
                self.request(answers.current_visitation_arrangement if visiting else None, visitation_label),
                self.request(
                    answers.split_arrangement_details if arrangement == "split" else None,
                    "פירוט חלוקת הזמנים",
                ),
                self.request(
                    answers.who_should_have_custody,
                    "עולה מהאמור לעיל - למה המשמורת צריכה להיות אצל המבקש/ת",
                ),
                self.request(answers.why_not_other_parent, "למה המשמורת לא צריכה להיות אצל ההורה השני"),
            ]
        )
        rewritten = await self.rewrite(*requests)
        relationship = rewritten[0]
        child_texts = rewritten[1 : 1 + len(children_with_text)]
        visitation, split_details, custody_summary, why_not = rewritten[1 + len(children_with_text) :]

        section: list[DocumentNode] = self.relationship_section(minors)
        if relationship:
            section.append(nodes.body(relationship))
        for child, text in zip(children_with_text, child_texts):
            section.extend(
                [
                    nodes.subsection_header(f"מערכת היחסים עם {child.full_name or DEFAULT_CHILD_NAME}"),
                    nodes.body(text),
                ]
            )

        section.append(nodes.subsection_header("מצב מגורים נוכחי"))
        living = self.living_arrangement(arrangement, visitation, split_details)
        if living:
            section.append(nodes.body(living))
        if answers.since_when and arrangement != "together":
            section.append(nodes.body(f"מצב זה החל מיום {format_date(answers.since_when)}."))

        if custody_summary:
            section.extend([nodes.subsection_header("עולה מהאמור לעיל"), nodes.body(custody_summary)])
        if why_not:
            section.append(nodes.body(why_not))

        section.append(nodes.subsection_header('ב. טובת הילד "עקרון על"'))
        section.extend(
            nodes.numbered_item(number, text)
            for number, text in enumerate((BEST_INTEREST_PRINCIPLE, BEST_INTEREST_CITATION), start=1)
        )
        section.append(nodes.body(BEST_INTEREST_QUOTE))
        return section

    def living_arrangement(self, arrangement: str | None, visitation: str, split_details: str) -> str:
        if arrangement == "together":
            return "הקטינים מתגוררים תחת קורת גג אחת, עם הוריהם."
        if arrangement == "with_applicant":
            text = f"הקטינים מתגוררים אצל {self.claimant.title}."
            if visitation:
                text += f" הסדרי הראיה עם {self.respondent.title}: {visitation}"
            return text
        if arrangement == "with_respondent":
            text = f"הקטינים מתגוררים אצל {self.respondent.title}."
            if visitation:
                text += f" הסדרי הראיה עם {self.claimant.title}: {visitation}"
            return text
        if arrangement == "split":
            details = split_details or "הזמן מתחלק בין שני ההורים"
            return f"הקטינים מתגוררים חלק מהזמן אצל כל אחד מההורים. {details}"
        return ""
