"""Sections shared by every family-court claim.

Each function returns an ordered list of document nodes. Composers decide
which sections appear and in what order.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime

from document_engine.builders import NodeFactory
from document_engine.config import EngineSettings, LawyerProfile
from document_engine.formatting import (
    NBSP,
    NOT_SPECIFIED,
    RLM,
    SIGNATURE_PLACEHOLDER,
    format_date,
    format_long_date,
    hebrew_label,
    is_yes,
    or_not_specified,
    yes_no,
)
from document_engine.gender import GenderedTerms
from document_engine.nodes import Alignment, DocumentNode
from intake.models import Attachment, CaseRecord, Child

ITEMS_PER_CLAIM_PAGE = 8
CHILDREN_PER_FORM_PAGE = 3
POA_PAGES = 2
AFFIDAVIT_PAGES = 1

ATTACHMENT_IMAGE_WIDTH = 550
ATTACHMENT_IMAGE_HEIGHT = 750

POWERS_OF_ATTORNEY = (
    'לחתום על ולהגיש בשמי כל תביעה או תביעה שכנגד, ו/או כל בקשה, הגנה, התנגדות, בקשה למתן רשות לערער, ערעור, דיון נוסף, הודעה, טענה, השגה, ערר, תובענה או כל הליך אחר הנובע מההליך הנ"ל ללא יוצא מן הכלל. ומבלי לפגוע באמור לעיל גם להודות ו/או לכפור בשמי במשפטים פלילים.',
    'לחתום על ו/או לשלוח התראות נוטריוניות או אחרות, לדרוש הכרזת פשיטת רגל, או פירוק גוף משפטי ולעשות את כל הפעולות הקשורות והנובעות מהעניין הנ"ל.',
    'לבקש ולקבל כל חוות דעת רפואית ו/או כל מסמך רפואי אחר מכל רופא או מוסד שבדק אותי ו/או כל חוות דעת אחרת הנוגעת לענין הנ"ל.',
    'לייצגני ולהופיע בשמי ובמקומי בקשר לכל אחת מהפעולות הנ"ל בפני כל בתי המשפט, בתי הדין למיניהם, רשויות ממשלתיות, עיריות, מועצות מקומיות ו/או כל רשות אחרת, עד לערכאתם העליונה, ככל שהדברים נוגעים או קשורים לעניין הנ"ל.',
    'לנקוט בכל הפעולות הכרוכות בייצוג האמור והמותרות על-פי סדרי הדין הקיימים או שיהיו קיימים בעתיד ובכללם הזמנת עדים ומינוי מומחים, והכל על-פי הדין שיחול וכפי שבא כחי ימצא לנכון.',
    'למסור כל עניין הנובע מהעניין האמור לעיל לבוררות ולחתום על שטר בוררות כפי שבא כחי ימצא לנכון.',
    'להתפשר בכל עניין הנוגע או הנובע מהעניינים האמורים לעיל לפי שקול דעתו של בא כחי ולחתום על פשרה כזו בבית המשפט או מחוצה לו.',
    'להוציא לפועל כל פס"ד או החלטה או צו, לדרוש צווי מכירה או פקודות מאסר ולנקוט בכל הפעולות המותרות על פי חוק ההוצאה לפועל ותקנותיו.',
    'לנקוט בכל הפעולות ולחתום על כל מסמך או כתב בלי יוצא מן הכלל אשר בא כחי ימצא לנכון בכל עניין הנובע ו/או הנוגע לעניין הנ"ל.',
    'לגבות את סכום התביעה או כל סכום אחר בכל עניין מהעניינים הנ"ל לרבות הוצאות בית המשפט ושכר טרחת עו"ד, לקבל בשמי כל מסמך וחפץ ולתת קבלות ושחרורים כפי שבא כוחי ימצא לנכון ולמתאים.',
    'לבקש ולקבל מידע שהנני זכאי לקבלו על פי כל דין מכל מאגר מידע של רשות כלשהי הנוגע לעניין הנ"ל.',
    'להופיע בשמי ולייצגני בעניין הנ"ל בפני רשם המקרקעין, בלשכות רישום המקרקעין, לחתום בשמי ובמקומי על כל בקשה, הצהרה ומסמכים אחרים למיניהם ולבצע בשמי כל עסקה המוכרת על פי דין וליתן הצהרות, קבלות ואישורים ולקבל בשמי ובמקומי כל מסמך שאני רשאי לקבלו על פי דין.',
    'לייצגני ולהופיע בשמי בפני רשם החברות, רשם השותפויות ורשם האגודות השיתופיות, לחתום בשמי ובמקומי על כל בקשה או מסמך אחר בקשר לרשום גוף משפטי, לטפל ברישומו או מחיקתו של כל גוף משפטי ולטפל בכל דבר הנוגע לו ולבצע כל פעולה בקשר לאותו גוף משפטי.',
    'לטפל בשמי בכל הקשור לרישום פטנטים, סימני מסחר וכל זכות אחרת המוכרת בדין.',
    'להעביר יפוי כח זה על כל הסמכויות שבו או חלק מהן לעו"ד אחר עם זכות העברה לאחרים, לפטרם ולמנות אחרים במקומם ולנהל את עניני הנ"ל לפי ראות עיניי ובכלל לעשות את כל הצעדים שימצא לנכון ומועיל בקשר עם המשפט או עם עניני הנ"ל והריני מאשר את מעשיו או מעשי ממלאי המקום בתוקף יפוי כח זה מראש.',
)

AFFIDAVIT_STATEMENTS = (
    "אני נמצא בתחומי מדינת ישראל.",
    "תצהיר זה ניתן בתמיכה לכתב התביעה.",
    "הריני מצהיר כי כל האמור בבקשה – אמת.",
    "זהו שמי, זו חתימתי ותוכן תצהירי אמת.",
)

HOUSING_TYPES = {
    "jointOwnership": "בעלות משותפת",
    "applicantOwnership": "בבעלות המבקש/ת",
    "respondentOwnership": "בבעלות הנתבע/ת",
    "rental": "שכירות",
    "other": "אחר",
}

SUMMONS_REGULATION = 'תקנה 13(א) לתקנות בית משפט לענייני משפחה (סדרי דין), התשפ"א-2020'
DEFAULT_JUDGMENT_REGULATION = 'תקנה 130 לתקנות סדר הדין האזרחי, התשע"ט-2018'


# ---------------------------------------------------------------------------
# Children
# ---------------------------------------------------------------------------


def child_naturally(child: Child) -> str:
    """``name (ת.ז id, יליד dd/mm/yyyy)``."""
    born = format_date(child.birth_date) or NOT_SPECIFIED
    return f"{child.full_name} (ת.ז {or_not_specified(child.id_number)}, יליד {born})"


def child_bullet(child: Child) -> str:
    address = child.address or child.street or NOT_SPECIFIED
    return (
        f"שם:{RLM} {child.full_name} ת״ז:{RLM} {or_not_specified(child.id_number)} "
        f"ת״ל:{RLM} {format_date(child.birth_date) or NOT_SPECIFIED} כתובת:{RLM} {address}"
    )


def children_phrase(count: int) -> str:
    return "ילד" if count == 1 else f"{count} ילדים"


# ---------------------------------------------------------------------------
# Court header
# ---------------------------------------------------------------------------


def court_header(
    nodes: NodeFactory,
    settings: EngineSettings,
    case: CaseRecord,
    claimant: GenderedTerms,
    respondent: GenderedTerms,
    *,
    minors: list[Child] | None = None,
) -> list[DocumentNode]:
    """Signing-date line, court, parties with counsel and the gendered aliases."""
    spacing = nodes.style.spacing
    lawyer = settings.lawyer
    section: list[DocumentNode] = [
        nodes.body("תאריך חתימת המסמך: ___________"),
        nodes.body("בבית המשפט לענייני משפחה"),
        nodes.body(
            f"{settings.court_city}{NBSP * 70}בפני כב' השו' {settings.judge_name}",
            after=spacing.paragraph // 2,
        ),
    ]

    if minors:
        listed = ", ".join(f'{child.full_name} ת"ז {or_not_specified(child.id_number)}' for child in minors)
        section.append(nodes.info_line("בעניין הקטינים", listed, after=spacing.line))
        section.append(nodes.body('(להלן: "הילדים")', after=spacing.paragraph))

    section.append(
        nodes.info_line(
            claimant.title,
            f'{claimant.name} מ"ז {or_not_specified(case.claimant.id_number)}',
            after=spacing.line,
        )
    )
    section.extend(
        [
            nodes.indented(f"מרח' {or_not_specified(case.claimant.address)}"),
            nodes.indented(f'באמצעות ב"כ עוה"ד {lawyer.name} מ"ר {lawyer.license_number}'),
            nodes.indented(lawyer.address),
            nodes.indented(f"טל: {lawyer.phone} פקס: {lawyer.fax}"),
            nodes.indented(f'דוא"ל: {lawyer.email}'),
            nodes.body(claimant.alias, after=spacing.paragraph),
            nodes.centered_title("נגד"),
            nodes.info_line(
                respondent.title,
                f'{respondent.name} מ"ז {or_not_specified(case.respondent.id_number)}',
                after=spacing.line,
            ),
            nodes.indented(f"מרח' {or_not_specified(case.respondent.address)}"),
            nodes.indented(f"טל: {or_not_specified(case.respondent.phone)}"),
            nodes.body(respondent.alias, after=spacing.subsection),
        ]
    )
    return section


def summons(nodes: NodeFactory, claimant: GenderedTerms) -> list[DocumentNode]:
    filed = "הגיש" if claimant.is_male else "הגישה"
    return [
        nodes.section_header(f"הזמנה לדין:{RLM}"),
        nodes.body(
            f"הואיל ו{claimant.title} {filed} כתב תביעה זה נגדך, אתה מוזמן להגיש כתב הגנה "
            f"בתוך שלושים ימים מיום שהומצאה לך הזמנה זו, לפי {SUMMONS_REGULATION}."
        ),
        nodes.body(
            f"לתשומת לבך, אם לא תגיש כתב הגנה אזי לפי {DEFAULT_JUDGMENT_REGULATION}, "
            f"תהיה ל{claimant.title} הזכות לקבל פסק דין שלא בפניך.",
            after=nodes.style.spacing.section,
        ),
    ]


# ---------------------------------------------------------------------------
# Relationship narrative
# ---------------------------------------------------------------------------


_LIVING_CLAUSES = {
    "split": ", כאשר המגורים חלוקים בין ההורים.",
    "together": ", כאשר כל המשפחה מתגוררת יחד.",
}

DETERIORATION = (
    "עם השנים חלה הידרדרות במערכת היחסים בין הצדדים, עד כי לא ניתן היה עוד "
    "להמשיך בחיים המשותפים. "
)


def relationship_narrative(
    case: CaseRecord,
    claimant: GenderedTerms,
    children: list[Child] | None = None,
    arrangement: str | None = None,
) -> str:
    """One flowing paragraph describing the relationship.

    In order: marital status with the wedding date, shared children, how the
    relationship broke down, separation, then where the children live.
    ``children`` narrows the children mentioned (custody claims pass only the
    minors); by default every child on the record is considered.
    ``arrangement`` overrides the living arrangement from the custody answers.
    """
    pool = case.children if children is None else children
    shared = [child for child in pool if case.is_shared_child(child)]
    previous = [child for child in pool if not case.is_shared_child(child)]

    status = "נשוי" if case.is_married else "לא נשואי"
    wedding = format_date(case.marriage_date)
    if wedding:
        status += f" אשר נישאו ביום {wedding}"
    if shared:
        names = ", ".join(child_naturally(child) for child in shared)
        text = f"המדובר בזוג {status}, להם נולדו {children_phrase(len(shared))}: {names}. "
    else:
        text = f"המדובר בזוג {status}. "
    text += DETERIORATION

    separation = case.separation_date
    if separation:
        text += f"כיום הצדדים גרים בנפרד מיום {format_date(separation)}"
    else:
        text += "כיום הצדדים גרים בנפרד"

    if shared:
        if arrangement is None and case.custody:
            arrangement = case.custody.current_living_arrangement
        if arrangement == "with_applicant":
            text += f", כאשר הילדים מתגוררים עם {case.claimant.full_name}."
        elif arrangement == "with_respondent":
            text += f", כאשר הילדים מתגוררים עם {case.respondent.full_name}."
        else:
            text += _LIVING_CLAUSES.get(arrangement or "", ".")
    else:
        text += "."

    if previous:
        names = ", ".join(child_naturally(child) for child in previous)
        holder = "למבקש" if claimant.is_male else "למבקשת"
        noun = "ילד" if len(previous) == 1 else "ילדים"
        text += f" בנוסף, {holder} {noun} מנישואין קודמים: {names}."

    return text


# ---------------------------------------------------------------------------
# Statement of details (Form 3)
# ---------------------------------------------------------------------------


def housing_type(value: str | None) -> str:
    if not value:
        return NOT_SPECIFIED
    return HOUSING_TYPES.get(value, value)


def statement_of_details(
    nodes: NodeFactory,
    case: CaseRecord,
    claimant: GenderedTerms,
    respondent: GenderedTerms,
    *,
    nature: str,
    today: date,
) -> list[DocumentNode]:
    """Form 3 (regulation 12) for claims between spouses other than alimony."""
    spacing = nodes.style.spacing
    answers = case.answers
    section: list[DocumentNode] = [
        nodes.main_title("טופס 3"),
        nodes.centered_title("(תקנה 12)"),
        nodes.main_title("הרצאת פרטים בתובענה בין בני זוג"),
        nodes.centered_title("(למעט תביעת מזונות)"),
        nodes.body(f"מהות התובענה:{RLM} {nature}", after=spacing.paragraph),
        nodes.body(f"מעמדו של ממלא הטופס:{RLM} {claimant.title}", after=spacing.section),
        nodes.section_header("פרטים אישיים:"),
    ]

    for heading, party in ((f"1. {claimant.title}:", case.claimant), ("2. בן/בת הזוג:", case.respondent)):
        section.append(nodes.subsection_header(heading))
        section.extend(
            [
                nodes.info_line("שם פרטי ושם משפחה", or_not_specified(party.full_name)),
                nodes.info_line("מספר זהות", or_not_specified(party.id_number)),
                nodes.info_line("תאריך לידה", format_date(party.birth_date) or NOT_SPECIFIED),
                nodes.info_line("כתובת", or_not_specified(party.address)),
                nodes.info_line("טלפון בבית", or_not_specified(party.phone)),
                nodes.info_line("נייד", or_not_specified(party.phone)),
            ]
        )

    section.append(nodes.section_header("4. פרטים לגבי המצב האישי:"))
    wedding = format_date(case.marriage_date) or NOT_SPECIFIED
    for terms, married_before, had_children in (
        (claimant, answers.married_before, answers.had_children_from_previous),
        (respondent, answers.married_before2, answers.had_children_from_previous2),
    ):
        section.extend(
            [
                nodes.subsection_header(f"{terms.name}:"),
                nodes.info_line("תאריך הנישואים הנוכחיים", wedding),
                nodes.info_line("נישואין קודמים", yes_no(married_before)),
                nodes.info_line(f"האם ל{terms.name} יש ילדים מנישואים קודמים", yes_no(had_children)),
            ]
        )
    section.append(nodes.body("(בסעיף זה – נישואין לרבות ברית זוגיות.)", after=spacing.paragraph))

    section.append(nodes.section_header("6. ילדים:"))
    if case.children:
        for index, child in enumerate(case.children, start=1):
            section.extend(
                [
                    nodes.subsection_header(f"ילד/ה {index}:"),
                    nodes.info_line("שם מלא", or_not_specified(child.full_name)),
                    nodes.info_line("מספר זהות", or_not_specified(child.id_number)),
                    nodes.info_line("תאריך לידה", format_date(child.birth_date) or NOT_SPECIFIED),
                    nodes.info_line("כתובת", or_not_specified(child.address)),
                ]
            )
    else:
        section.append(nodes.body("אין ילדים"))

    section.extend(
        [
            nodes.section_header("7. פרטים לגבי דירת המגורים:"),
            nodes.info_line(f"הדירה שבה גר/ה {claimant.title} היא", housing_type(answers.applicant_home_type)),
            nodes.info_line("הדירה שבה גר/ה בן/בת הזוג היא", housing_type(answers.partner_home_type)),
        ]
    )

    section.extend(_domestic_violence(nodes, case))

    section.append(nodes.section_header("9. נתונים על תיקים אחרים בענייני המשפחה בין בני הזוג:"))
    section.append(nodes.body("(פרט לגבי כל תיק בנפרד)"))
    if answers.other_family_cases:
        for index, family_case in enumerate(answers.other_family_cases, start=1):
            section.extend(
                [
                    nodes.subsection_header(f"תיק {index}:"),
                    nodes.info_line("מספר תיק", or_not_specified(family_case.case_number)),
                    nodes.info_line("סוג התיק", or_not_specified(family_case.case_type)),
                    nodes.info_line("בית המשפט", or_not_specified(family_case.court)),
                    nodes.info_line("סטטוס", or_not_specified(family_case.status)),
                ]
            )
    else:
        section.append(nodes.body("אין תיקים אחרים"))

    section.extend(
        [
            nodes.section_header("10. קשר עם גורמים טיפוליים:"),
            nodes.info_line("האם היית/ם בקשר עם מחלקת הרווחה?", yes_no(answers.contacted_welfare)),
            nodes.info_line(
                "האם היית/ם בקשר עם ייעוץ נישואין או ייעוץ זוגי?",
                yes_no(answers.contacted_marriage_counseling),
            ),
            nodes.info_line(
                "האם את/ה מוכנ/ה לקחת חלק בייעוץ משפחתי?",
                yes_no(answers.willing_to_join_family_counseling),
            ),
            nodes.info_line("האם את/ה מוכנ/ה לקחת חלק בגישור?", yes_no(answers.willing_to_join_mediation)),
            nodes.section_header("הצהרה"),
            nodes.body("אני מצהיר כי לפי מיטב ידיעתי הפרטים שמילאתי בטופס נכונים."),
            nodes.body(f"תאריך:{RLM} {format_date(today)}", before=spacing.section, after=spacing.paragraph),
            nodes.signature_or_placeholder(case.client_signature, alignment=Alignment.START),
            nodes.body(claimant.name),
        ]
    )
    return section


def _domestic_violence(nodes: NodeFactory, case: CaseRecord) -> list[DocumentNode]:
    answers = case.answers
    section: list[DocumentNode] = [
        nodes.section_header("8. נתונים על אלימות במשפחה:"),
        nodes.body(
            "הוגשה בעבר בקשה לבית המשפט או לבית דין דתי למתן צו הגנה לפי החוק למניעת "
            'אלימות במשפחה, התשנ"א-1991:'
        ),
        nodes.info_line("", yes_no(answers.protection_order_requested)),
    ]
    if is_yes(answers.protection_order_requested):
        section.extend(
            [
                nodes.info_line("אם כן – מתי", format_date(answers.protection_order_date) or NOT_SPECIFIED),
                nodes.info_line("כנגד מי", or_not_specified(answers.protection_order_against)),
                nodes.info_line("מספר התיק", or_not_specified(answers.protection_order_case_number)),
                nodes.info_line("בפני מי נדון התיק", or_not_specified(answers.protection_order_judge)),
                nodes.info_line("האם ניתן צו הגנה", yes_no(answers.protection_order_given)),
            ]
        )
        if is_yes(answers.protection_order_given):
            section.extend(
                [
                    nodes.info_line(
                        "ניתן צו הגנה ביום",
                        format_date(answers.protection_order_given_date) or NOT_SPECIFIED,
                    ),
                    nodes.info_line("תוכן הצו", or_not_specified(answers.protection_order_content)),
                ]
            )
    section.append(
        nodes.body("האם היו בעבר אירועי אלימות שהוגשה בגללם תלונה למשטרה ולא הוגשה בקשה לצו הגנה?")
    )
    section.append(nodes.info_line("", yes_no(answers.past_violence_reported)))
    if is_yes(answers.past_violence_reported):
        section.append(
            nodes.info_line("אם כן – פרט/י", or_not_specified(answers.past_violence_reported_details))
        )
    return section


# ---------------------------------------------------------------------------
# Power of attorney and affidavit
# ---------------------------------------------------------------------------


def power_of_attorney(
    nodes: NodeFactory,
    lawyer: LawyerProfile,
    case: CaseRecord,
    *,
    claim_text: str,
    today: date,
) -> list[DocumentNode]:
    """Power of attorney with the fixed list of fifteen powers."""
    spacing = nodes.style.spacing
    client_name = case.claimant.full_name or ""
    section: list[DocumentNode] = [
        nodes.main_title("יפוי כח"),
        nodes.body(
            f"אני החתום מטה תז {or_not_specified(case.claimant.id_number)}, {client_name} ממנה בזאת את "
            f'עוה"ד {lawyer.name} להיות ב"כ בענין הכנת {claim_text}.'
        ),
        nodes.body(
            'מבלי לפגוע בכלליות המינוי הנ"ל יהיו באי כחי רשאים לעשות ולפעול בשמי ובמקומי בכל '
            'הפעולות הבאות, כולן או מקצתן הכל בקשר לעניין הנ"ל ולכל הנובע ממנו כדלקמן:'
        ),
    ]
    section.extend(nodes.numbered_item(number, power) for number, power in enumerate(POWERS_OF_ATTORNEY, start=1))
    section.extend(
        [
            nodes.body('הכתוב דלעיל ביחיד יכלול את הרבים ולהפך.', before=spacing.section),
            nodes.body(f"ולראיה באתי על החתום, היום {format_date(today)}"),
            nodes.signature_or_placeholder(case.client_signature, 250, 125),
            nodes.left_line(client_name, after=spacing.section),
            nodes.left_line("אני מאשר את חתימת מרשי", after=spacing.line),
        ]
    )
    if case.lawyer_signature:
        section.append(nodes.signature_image(case.lawyer_signature, 300, 150))
    else:
        section.append(nodes.left_line(f'{lawyer.name}, עו"ד'))
    return section


def affidavit(
    nodes: NodeFactory,
    lawyer: LawyerProfile,
    case: CaseRecord,
    claimant: GenderedTerms,
    *,
    now: datetime,
) -> list[DocumentNode]:
    """Affidavit sworn by video conference in Israel, certified by counsel."""
    spacing = nodes.style.spacing
    client_name = case.claimant.full_name or claimant.name
    section: list[DocumentNode] = [
        nodes.main_title("תצהיר בהיוועדות חזותית בישראל"),
        nodes.body(
            f'אני הח"מ {lawyer.name} ת.ז {lawyer.id_number}, לאחר שהוזהרתי כי עלי לומר את האמת '
            "וכי אהיה צפוי לעונשים הקבועים בחוק, אם לא אעשה כן, מצהיר בזאת כדלקמן:",
            after=spacing.section,
        ),
    ]
    section.extend(nodes.numbered_item(number, text) for number, text in enumerate(AFFIDAVIT_STATEMENTS, start=1))
    section.extend(
        [
            nodes.left_line(SIGNATURE_PLACEHOLDER, before=spacing.section, after=spacing.section),
            nodes.body(f"הריני לאשר כי {client_name}, הינו לקוח קבוע במשרדי ומוכר לי באופן אישי."),
            nodes.body(
                f"ביום {format_long_date(now.date())} בשעה {now.strftime('%H:%M')} הופיע בפני, "
                f"{claimant.honorific} {client_name} ולאחר שהזהרתיו כי עליו לומר את האמת וכי יהיה "
                'צפוי לעונשים הקבועים בחוק אם לא יעשה כן, אשר את האמור בתצהיר הנ"ל וחתם עליו.'
            ),
            nodes.body("תצהירו וחתימתו כאמור הוצגו לי במהלך היוועדות חזותית והתצהיר נחתם מולי."),
            nodes.body(
                "ההופעה לפניי, בוצעה באמצעות היוועדות חזותית אשר מתועדת אצלי, כאשר המצהיר הופיע "
                "בפני על גבי הצג, עת הצהרתו מושא האימות לפניו, והוא מצהיר בפניי, כי הוא מצוי "
                "במדינת ישראל בזמן החתימה והאימות, והוא מסכים לתיעוד החזותי ועשיית השימוש בו."
            ),
        ]
    )
    if case.lawyer_signature:
        section.append(nodes.signature_image(case.lawyer_signature, 300, 150))
    else:
        section.append(nodes.signature_or_placeholder(None))
        section.append(nodes.left_line(f'{lawyer.name}, עו"ד'))
    return section


# ---------------------------------------------------------------------------
# Attachments
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PageEstimate:
    """Estimated length of each part that precedes the attachments appendix."""

    main_document: int
    statement: int
    power_of_attorney: int = POA_PAGES
    affidavit: int = AFFIDAVIT_PAGES

    @property
    def toc_page(self) -> int:
        return self.main_document + self.statement + self.power_of_attorney + self.affidavit


def statement_pages(child_count: int) -> int:
    """Form 3 or Form 4: two pages plus one per three children."""
    return 2 + math.ceil(child_count / CHILDREN_PER_FORM_PAGE)


def estimate_page_count(item_count: int, child_count: int) -> PageEstimate:
    """Main claim: 2 + ceil(items / 8); statement of details: 2 + ceil(children / 3)."""
    return PageEstimate(
        main_document=2 + math.ceil(item_count / ITEMS_PER_CLAIM_PAGE),
        statement=statement_pages(child_count),
    )


def estimate_toc_page(item_count: int, child_count: int) -> int:
    return estimate_page_count(item_count, child_count).toc_page


def attachment_page_ranges(attachments: list[Attachment], toc_page: int) -> list[str]:
    """Page range label per attachment; one page per image.

    The first attachment starts three pages after ``toc_page`` (title page,
    table of contents, then the attachment itself).
    """
    current = toc_page + 3
    ranges = []
    for attachment in attachments:
        pages = max(len(attachment.images), 1)
        if pages == 1:
            ranges.append(f"עמוד {current}")
        else:
            ranges.append(f"עמודים {current}-{current + pages - 1}")
        current += pages
    return ranges


def attachments_section(
    nodes: NodeFactory,
    attachments: list[Attachment],
    toc_page: int,
) -> list[DocumentNode]:
    if not attachments:
        return []

    spacing = nodes.style.spacing
    section: list[DocumentNode] = [
        nodes.main_title("נספחים"),
        nodes.spacer(),
        nodes.subsection_header("תוכן עניינים"),
    ]
    labels = [f"נספח {attachment.label or hebrew_label(index)}" for index, attachment in enumerate(attachments)]
    for label, attachment, pages in zip(labels, attachments, attachment_page_ranges(attachments, toc_page)):
        section.append(nodes.toc_entry(f"{label} - {attachment.description}", pages))
    section.append(nodes.spacer(spacing.section))
    section.append(nodes.page_break())

    for index, (label, attachment) in enumerate(zip(labels, attachments)):
        section.append(nodes.subsection_header(f"{label} - {attachment.description}"))
        section.extend(
            nodes.image(image, ATTACHMENT_IMAGE_WIDTH, ATTACHMENT_IMAGE_HEIGHT) for image in attachment.images
        )
        if index < len(attachments) - 1:
            section.append(nodes.page_break())
    return section
