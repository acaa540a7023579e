"""Remedy sequencing for the claim documents.

Remedies are built as an ordered list of descriptors and numbered by
enumeration at render time, so inserting a conditional remedy never requires
renumbering the ones after it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from document_engine.aggregation import coerce_int
from document_engine.gender import GenderedTerms

# Ratio of the higher to the lower gross monthly salary from which the claim
# asks for an unequal division. Equality counts as disparity.
INCOME_DISPARITY_THRESHOLD = 2.0


@dataclass(frozen=True, slots=True)
class Remedy:
    key: str
    text: str


@dataclass(frozen=True, slots=True)
class IncomeDisparity:
    has_disparity: bool
    ratio: float = 0.0
    higher_earner: GenderedTerms | None = None
    lower_earner: GenderedTerms | None = None


def parse_salary(value: Any) -> int:
    return max(coerce_int(value), 0)


def check_income_disparity(
    claimant_salary: Any,
    respondent_salary: Any,
    claimant: GenderedTerms,
    respondent: GenderedTerms,
    threshold: float = INCOME_DISPARITY_THRESHOLD,
) -> IncomeDisparity:
    """Compare the parties' gross monthly salaries.

    Both salaries must be present and non-zero; otherwise there is no
    disparity.
    """
    first = parse_salary(claimant_salary)
    second = parse_salary(respondent_salary)
    if not first or not second:
        return IncomeDisparity(has_disparity=False)

    ratio = max(first, second) / min(first, second)
    if ratio < threshold:
        return IncomeDisparity(has_disparity=False, ratio=ratio)

    if first > second:
        return IncomeDisparity(True, ratio, higher_earner=claimant, lower_earner=respondent)
    return IncomeDisparity(True, ratio, higher_earner=respondent, lower_earner=claimant)


def base_property_remedies(claimant: GenderedTerms, respondent: GenderedTerms) -> list[Remedy]:
    return [
        Remedy("balance", "לאזן את משאבי הצדדים, וליישם חלוקה הוגנת."),
        Remedy("expert", "למנות מומחה מתאים (לפי צורך) לשם איזון כולל."),
        Remedy(
            "restitution",
            f"להורות על השבה ל{claimant.title} של כל כספים, אם ייקבע שנמשכו או נלקחו שלא כדין.",
        ),
        Remedy(
            "disclosure",
            f"להורות ל{respondent.title} למסור דו״ח מרוכז בדבר כלל הזכויות הסוציאליות "
            f"והכספים בבעלות{respondent.possessive_suffix}, בכל גוף רלוונטי.",
        ),
        Remedy("discovery", "להורות על גילוי מסמכים."),
        Remedy("split", "להתיר פיצול סעדים ביחס לעילות/סעדים שטרם נתבררו או נתגבשו."),
        Remedy(
            "interim",
            f"לתת כל סעד זמני או קבוע הנדרש לשמירת זכויות {claimant.title} עד להשלמת האיזון.",
        ),
        Remedy("costs", "לחייב בהוצאות ושכ״ט עו״ד בצירוף מע״מ כדין."),
    ]


def disparity_remedy(disparity: IncomeDisparity) -> Remedy:
    lower = disparity.lower_earner
    higher = disparity.higher_earner
    verb = "משתכר" if lower.is_male else "משתכרת"
    return Remedy(
        "unequal_division",
        "לחלק את הרכוש באופן לא שווה, בהתאם להפרשי ההכנסות בין הצדדים, על מנת ליצור "
        f"שוויון גם לאחר הפירוד. {lower.title} {verb} פחות באופן משמעותי מ{higher.title} "
        f"(פי {disparity.ratio:.1f}), ולכן יש להתחשב בכך בחלוקת הרכוש.",
    )


def build_property_remedies(
    claimant: GenderedTerms,
    respondent: GenderedTerms,
    disparity: IncomeDisparity,
) -> list[Remedy]:
    """Base remedies, with the unequal-division remedy right after the first."""
    remedies = base_property_remedies(claimant, respondent)
    if disparity.has_disparity:
        remedies.insert(1, disparity_remedy(disparity))
    return remedies


def number_remedies(remedies: list[Remedy]) -> list[tuple[int, str]]:
    return [(number, remedy.text) for number, remedy in enumerate(remedies, start=1)]


DIVORCE_REMEDIES: tuple[Remedy, ...] = (
    Remedy("dissolve", "להורות על פירוק הנישואין בין הצדדים."),
    Remedy("children", "לקבוע את ההסדרים הנדרשים לגבי הילדים, ככל שישנם קטינים משותפים."),
    Remedy("property", "לקבוע את ההסדרים הנדרשים לגבי הרכוש והחובות, ככל שלא הוסדרו."),
    Remedy("costs", 'לחייב את הנתבע/ת בהוצאות המשפט ושכר טרחת עו"ד.'),
    Remedy("other", "ליתן כל סעד אחר שבית המשפט ימצא לנכון."),
)


CUSTODY_REMEDIES: tuple[Remedy, ...] = (
    Remedy("welfare_report", "למנות פקיד סעד שיתן תסקיר."),
    Remedy("visitation", "לקבוע הסדרי ראיה, וחלוקת זמנים בפועל, לפי טובת הילדים."),
    Remedy(
        "interim",
        "ליתן סעדים זמנים, ככל שבית המשפט יחשוב שזה עולה בקנה אחד עם טובת הילדים.",
    ),
)


ALIMONY_REMEDIES: tuple[Remedy, ...] = (
    Remedy("alimony", "כבוד בית המשפט יפסוק מזונות לפי הפרמטרים שבפניו."),
    Remedy(
        "expenses",
        "כמו כן, מתבקש בית המשפט לחייב עבור הוצאות שונות, לרבות, הוצאות חינוך והוצאות "
        "רפואיות בהתאם לפרמטרים שהובאו בפני כבוד בית המשפט.",
    ),
    Remedy("interim", "סעדים זמנים ככל שידרשו."),
    Remedy("interim_alimony", "פסיקת מזונות זמנים."),
)
