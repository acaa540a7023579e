"""Tests for remedy sequencing and the income disparity rule."""

from __future__ import annotations

from document_engine.gender import PartyRole, resolve_terms
from document_engine.remedies import (
    CUSTODY_REMEDIES,
    build_property_remedies,
    check_income_disparity,
    number_remedies,
)

CLAIMANT = resolve_terms(PartyRole.CLAIMANT, "female", "דנה")
RESPONDENT = resolve_terms(PartyRole.RESPONDENT, "male", "יוסי")


def property_remedies(claimant_salary, respondent_salary, **kwargs) -> list[tuple[int, str]]:
    disparity = check_income_disparity(claimant_salary, respondent_salary, CLAIMANT, RESPONDENT, **kwargs)
    return number_remedies(build_property_remedies(CLAIMANT, RESPONDENT, disparity))


class TestIncomeDisparity:
    def test_small_gap_keeps_eight_remedies(self) -> None:
        remedies = property_remedies("10000", "15000")

        assert len(remedies) == 8
        assert [number for number, _ in remedies] == list(range(1, 9))

    def test_large_gap_inserts_unequal_division_second(self) -> None:
        remedies = property_remedies("10000", "25000")

        assert len(remedies) == 9
        number, text = remedies[1]
        assert number == 2
        assert text.startswith("לחלק את הרכוש באופן לא שווה")
        # The claimant earns less, so she is named as the lower earner.
        assert "התובעת משתכרת פחות באופן משמעותי מהנתבע" in text
        assert "(פי 2.5)" in text
        assert remedies[2][1] == "למנות מומחה מתאים (לפי צורך) לשם איזון כולל."

    def test_lower_earning_respondent_is_named(self) -> None:
        remedies = property_remedies("30000", "10000")
        assert "הנתבע משתכר פחות באופן משמעותי מהתובעת" in remedies[1][1]

    def test_ratio_equal_to_threshold_counts(self) -> None:
        disparity = check_income_disparity("10000", "20000", CLAIMANT, RESPONDENT)
        assert disparity.has_disparity
        assert disparity.ratio == 2.0

    def test_missing_or_zero_salary_means_no_disparity(self) -> None:
        assert not check_income_disparity(None, "20000", CLAIMANT, RESPONDENT).has_disparity
        assert not check_income_disparity("0", "20000", CLAIMANT, RESPONDENT).has_disparity
        assert not check_income_disparity("abc", "20000", CLAIMANT, RESPONDENT).has_disparity

    def test_threshold_is_configurable(self) -> None:
        assert len(property_remedies("10000", "25000", threshold=3.0)) == 8

    def test_salaries_with_separators_are_parsed(self) -> None:
        assert len(property_remedies("10,000", "25,000 ₪")) == 9


class TestRemedyText:
    def test_disclosure_uses_respondent_possessive(self) -> None:
        texts = [text for _, text in property_remedies(None, None)]
        assert any("בבעלותו" in text for text in texts)

    def test_feminine_respondent_possessive(self) -> None:
        respondent = resolve_terms(PartyRole.RESPONDENT, "female", "רונית")
        disparity = check_income_disparity(None, None, CLAIMANT, respondent)
        texts = [remedy.text for remedy in build_property_remedies(CLAIMANT, respondent, disparity)]
        assert any("בבעלותה" in text for text in texts)

    def test_custody_remedies_are_numbered_in_order(self) -> None:
        numbered = number_remedies(list(CUSTODY_REMEDIES))
        assert [number for number, _ in numbered] == [1, 2, 3]
        assert numbered[0][1] == "למנות פקיד סעד שיתן תסקיר."
