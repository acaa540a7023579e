"""Tests for the family-court claim composers."""

from __future__ import annotations

from datetime import date

import pytest

from document_engine.config import EngineSettings, LawyerProfile
from document_engine.exceptions import DocumentGenerationError
from document_engine.formatting import RLM
from document_engine.nodes import Alignment, Image, Paragraph, Table, document_text
from document_engine.transformer import TransformContext
from intake.models import CaseRecord, ClaimType
from packs.family_law.composers import (
    AlimonyClaimComposer,
    BackupComposer,
    CustodyClaimComposer,
    DivorceAgreementComposer,
    DivorceClaimComposer,
    PropertyClaimComposer,
)
from packs.family_law.composers.alimony import split_evenly
from packs.family_law.composers.divorce import related_claims_notice
from packs.family_law.composers.divorce_agreement import (
    DEFAULT_PROPERTY_TERM,
    PROPERTY_TERMS,
    marriage_duration,
)
from packs.family_law.composers.shared import (
    DETERIORATION,
    attachment_page_ranges,
    estimate_toc_page,
    relationship_narrative,
)


class FailingTransformer:
    name = "failing"

    async def transform(self, text: str, context: TransformContext) -> str:
        raise RuntimeError("model unavailable")


class TaggingTransformer:
    name = "tagging"

    def __init__(self) -> None:
        self.fields: list[str] = []

    async def transform(self, text: str, context: TransformContext) -> str:
        self.fields.append(context.field_label)
        return f"לטענת התובעת, {text}"


def record(payload: dict) -> CaseRecord:
    return CaseRecord.model_validate(payload)


def paragraph_index(nodes: list, text: str) -> int:
    return next(index for index, node in enumerate(nodes) if isinstance(node, Paragraph) and node.text == text)


class TestPropertyClaimComposer:
    @pytest.mark.asyncio
    async def test_inventory_totals_and_breakdown(self, case_record, fixed_now) -> None:
        nodes = await PropertyClaimComposer(case_record, now=fixed_now).compose()
        text = document_text(nodes)

        assert "סך הדירות עולה לסך של 1,500,000 ש״ח" in text
        assert f"• בבעלות שניהם:{RLM} 1,000,000 ש״ח (1 פריט)" in text
        assert f"• בבעלות דנה כהן:{RLM} 500,000 ש״ח (1 פריט)" in text
        assert "סך החובות עולים לסך של 20,000 ש״ח" in text
        assert "חייב יוסי כהן" in text

    @pytest.mark.asyncio
    async def test_claim_wording(self, case_record, fixed_now) -> None:
        nodes = await PropertyClaimComposer(case_record, now=fixed_now).compose()
        text = document_text(nodes)

        assert "כתב תביעה" in text
        assert 'חוק יחסי ממון בין בני זוג התשל"ג - 1973' in text
        assert "הואיל והתובעת הגישה כתב תביעה זה נגדך" in text
        assert "דנה כהן: שכיר/ה, מועסק/ת אצל חברת הייטק, שכר ברוטו: 10,000 ₪" in text
        assert "היום הקובע לענייננו הוא מועד הפירוד: 15/01/2024" in text
        assert "ביום 5 במרץ 2025 בשעה 10:30" in text

    @pytest.mark.asyncio
    async def test_no_disparity_remedy_for_small_gap(self, case_record, fixed_now) -> None:
        text = document_text(await PropertyClaimComposer(case_record, now=fixed_now).compose())

        assert "לחלק את הרכוש באופן לא שווה" not in text
        assert "8. לחייב בהוצאות ושכ״ט עו״ד בצירוף מע״מ כדין." in text

    @pytest.mark.asyncio
    async def test_disparity_remedy_is_second(self, case_payload, fixed_now) -> None:
        case_payload["property"]["respondentGrossSalary"] = "25000"

        text = document_text(await PropertyClaimComposer(record(case_payload), now=fixed_now).compose())

        assert "2. לחלק את הרכוש באופן לא שווה" in text
        assert "(פי 2.5)" in text
        assert "9. לחייב בהוצאות ושכ״ט עו״ד בצירוף מע״מ כדין." in text

    @pytest.mark.asyncio
    async def test_threshold_comes_from_settings(self, case_payload, fixed_now) -> None:
        case_payload["property"]["respondentGrossSalary"] = "25000"
        settings = EngineSettings(income_disparity_threshold=3.0)

        composer = PropertyClaimComposer(record(case_payload), settings=settings, now=fixed_now)
        text = document_text(await composer.compose())

        assert "לחלק את הרכוש באופן לא שווה" not in text

    @pytest.mark.asyncio
    async def test_signature_is_embedded(self, case_record, fixed_now, png_bytes) -> None:
        nodes = await PropertyClaimComposer(case_record, now=fixed_now).compose()
        images = [node for node in nodes if isinstance(node, Image)]

        assert images
        assert all(image.data == png_bytes for image in images)

    @pytest.mark.asyncio
    async def test_lawyer_profile_is_used(self, case_record, fixed_now) -> None:
        settings = EngineSettings(lawyer=LawyerProfile(name="רות לוי", license_number="55555"))

        text = document_text(await PropertyClaimComposer(case_record, settings=settings, now=fixed_now).compose())

        assert 'באמצעות ב"כ עוה"ד רות לוי מ"ר 55555' in text

    @pytest.mark.asyncio
    async def test_empty_inventory(self, case_payload, fixed_now) -> None:
        case_payload["property"] = {}

        text = document_text(await PropertyClaimComposer(record(case_payload), now=fixed_now).compose())

        assert "לא צוינו נכסים" in text
        assert "פרטי תעסוקה לא צוינו" in text

    @pytest.mark.asyncio
    async def test_missing_ids_print_not_specified(self, case_payload, fixed_now) -> None:
        case_payload["claimant"]["idNumber"] = ""
        case_payload["children"][0]["idNumber"] = None

        text = document_text(await PropertyClaimComposer(record(case_payload), now=fixed_now).compose())

        assert "דנה כהן מ״ז לא צוין ויוסי כהן מ״ז 987654321" in text
        assert f'התובעת:{RLM} דנה כהן מ"ז לא צוין' in text
        assert f"ת״ז:{RLM} לא צוין" in text
        assert "אני החתום מטה תז לא צוין, דנה כהן" in text
        assert "מ״ז None" not in text

    @pytest.mark.asyncio
    async def test_missing_party_names_are_rejected(self, case_payload, fixed_now) -> None:
        case_payload["claimant"]["fullName"] = ""
        case_payload["respondent"]["fullName"] = "  "

        with pytest.raises(DocumentGenerationError):
            await PropertyClaimComposer(record(case_payload), now=fixed_now).compose()


class TestRelationshipNarrative:
    def test_states_wedding_date_and_breakdown(self, case_record, fixed_now) -> None:
        terms = DivorceClaimComposer(case_record, now=fixed_now).claimant

        text = relationship_narrative(case_record, terms)

        assert text == (
            "המדובר בזוג נשוי אשר נישאו ביום 01/06/2010, להם נולדו ילד: "
            "נועה כהן (ת.ז 111111118, יליד 20/02/2014). "
            f"{DETERIORATION}כיום הצדדים גרים בנפרד מיום 15/01/2024."
        )

    def test_unmarried_couple_has_no_wedding(self, case_payload, fixed_now) -> None:
        case_payload["relationshipType"] = "notMarried"
        case_payload["weddingDate"] = None
        case = record(case_payload)

        text = relationship_narrative(case, DivorceClaimComposer(case, now=fixed_now).claimant)

        assert text.startswith("המדובר בזוג לא נשואי, להם נולדו ילד")
        assert "נישאו ביום" not in text
        assert DETERIORATION in text

    def test_arrangement_override(self, case_record, fixed_now) -> None:
        terms = DivorceClaimComposer(case_record, now=fixed_now).claimant

        text = relationship_narrative(case_record, terms, arrangement="together")

        assert text.endswith("מיום 15/01/2024, כאשר כל המשפחה מתגוררת יחד.")

    @pytest.mark.asyncio
    async def test_narrative_appears_in_claims(self, case_record, fixed_now) -> None:
        text = document_text(await PropertyClaimComposer(case_record, now=fixed_now).compose())

        assert "המדובר בזוג נשוי אשר נישאו ביום 01/06/2010" in text
        assert DETERIORATION.strip() in text


class TestAttachments:
    def test_toc_page_estimate(self) -> None:
        # Claim 2 + 1, statement 2 + 1, power of attorney 2, affidavit 1.
        assert estimate_toc_page(3, 1) == 9
        assert estimate_toc_page(0, 0) == 7

    def test_page_ranges(self, case_payload, png_base64, png_bytes) -> None:
        attachments = record(
            {
                **case_payload,
                "attachments": [
                    {"description": "תלוש שכר", "images": [png_base64, png_base64]},
                    {"description": "חוזה", "images": []},
                    {"description": "צילום", "images": [png_base64]},
                ],
            }
        ).attachments

        assert attachment_page_ranges(attachments, 9) == ["עמודים 12-13", "עמוד 14", "עמוד 15"]
        assert attachments[0].images == [png_bytes, png_bytes]

    @pytest.mark.asyncio
    async def test_appendix_follows_closing_documents(self, case_payload, fixed_now, png_base64) -> None:
        case_payload["attachments"] = [
            {"description": "תלוש שכר", "images": [png_base64, png_base64]},
            {"label": "ז", "description": "חוזה", "images": [png_base64]},
        ]

        nodes = await PropertyClaimComposer(record(case_payload), now=fixed_now).compose()
        text = document_text(nodes)

        assert text.index("תצהיר בהיוועדות חזותית בישראל") < text.index("נספחים")
        assert "נספח א - תלוש שכר" in text
        assert "נספח ז - חוזה" in text
        assert "עמודים 12-13" in text
        appendix_images = [node for node in nodes if isinstance(node, Image) and node.width == 550]
        assert len(appendix_images) == 3


class TestDivorceClaimComposer:
    @pytest.fixture
    def divorce_payload(self, case_payload) -> dict:
        case_payload["selectedClaims"] = ["divorce", "property", "custody"]
        case_payload["divorce"] = {
            "whoWantsDivorceAndWhy": "אני רוצה להתגרש כי אנחנו רבים",
            "divorceReasons": "ריבים מתמשכים",
            "weddingCity": "חיפה",
            "religiousMarriage": "yes",
            "ketubahAmount": "100000",
        }
        return case_payload

    @pytest.mark.asyncio
    async def test_failed_rewrite_keeps_client_text(self, divorce_payload, fixed_now) -> None:
        composer = DivorceClaimComposer(record(divorce_payload), transformer=FailingTransformer(), now=fixed_now)

        text = document_text(await composer.compose())

        assert "אני רוצה להתגרש כי אנחנו רבים" in text
        assert "ריבים מתמשכים" in text

    @pytest.mark.asyncio
    async def test_rewritten_text_is_used(self, divorce_payload, fixed_now) -> None:
        transformer = TaggingTransformer()
        composer = DivorceClaimComposer(record(divorce_payload), transformer=transformer, now=fixed_now)

        text = document_text(await composer.compose())

        assert "לטענת התובעת, ריבים מתמשכים" in text
        assert sorted(transformer.fields) == sorted(["הרקע לבקשת הגירושין", "עילות הגירושין"])

    @pytest.mark.asyncio
    async def test_marriage_details_and_related_claims(self, divorce_payload, fixed_now) -> None:
        text = document_text(await DivorceClaimComposer(record(divorce_payload), now=fixed_now).compose())

        assert "הנישואין נערכו בעיר חיפה." in text
        assert "הנישואין נערכו בטקס דתי." in text
        assert "סכום הכתובה: 100000" in text
        assert "הוגשו במקביל התביעות תביעה רכושית ותביעת משמורת" in text
        assert "טופס 3 - הרצאת פרטים" in text
        assert "1. להורות על פירוק הנישואין בין הצדדים." in text

    def test_related_claims_notice(self) -> None:
        assert related_claims_notice([ClaimType.DIVORCE]) is None
        single = related_claims_notice([ClaimType.DIVORCE, ClaimType.ALIMONY])
        assert single.startswith("בנוסף לכתב תביעה זה הוגשה במקביל תביעה תביעת מזונות")


class TestCustodyClaimComposer:
    @pytest.fixture
    def custody_payload(self, case_payload) -> dict:
        case_payload["selectedClaims"] = ["custody"]
        case_payload["children"].append(
            {"firstName": "עומר", "lastName": "כהן", "idNumber": "222222226", "birthDate": "2001-01-01"}
        )
        case_payload["custody"] = {
            "currentLivingArrangement": "with_applicant",
            "currentVisitationArrangement": "כל סוף שבוע שני",
            "whoShouldHaveCustody": "אני ההורה העיקרי",
        }
        return case_payload

    @pytest.mark.asyncio
    async def test_only_minors_in_header(self, custody_payload, fixed_now) -> None:
        nodes = await CustodyClaimComposer(record(custody_payload), now=fixed_now).compose()
        header = next(
            node for node in nodes if isinstance(node, Paragraph) and node.text.startswith("בעניין הקטינים")
        )

        assert "נועה כהן" in header.text
        assert "עומר" not in header.text

    @pytest.mark.asyncio
    async def test_petition_titles_and_arrangement(self, custody_payload, fixed_now) -> None:
        text = document_text(await CustodyClaimComposer(record(custody_payload), now=fixed_now).compose())

        assert "המבקשת מתכבדת להגיש" in text
        assert "1 קטין." in text
        assert "הקטינים מתגוררים אצל המבקשת. הסדרי הראיה עם המשיב: כל סוף שבוע שני" in text
        assert "אני ההורה העיקרי" in text
        assert "1. למנות פקיד סעד שיתן תסקיר." in text

    @pytest.mark.asyncio
    async def test_minor_without_id(self, custody_payload, fixed_now) -> None:
        custody_payload["children"][0]["idNumber"] = ""

        text = document_text(await CustodyClaimComposer(record(custody_payload), now=fixed_now).compose())

        assert 'נועה כהן ת"ז לא צוין' in text
        assert "נועה כהן (ת.ז לא צוין, יליד 20/02/2014)" in text

    @pytest.mark.asyncio
    async def test_blank_fields_are_not_rewritten(self, custody_payload, fixed_now) -> None:
        transformer = TaggingTransformer()

        await CustodyClaimComposer(record(custody_payload), transformer=transformer, now=fixed_now).compose()

        assert "פירוט חלוקת הזמנים" not in transformer.fields
        assert "תיאור מערכת היחסים" not in transformer.fields
        assert "הסדרי ראיה עם המשיב" in transformer.fields


class TestAlimonyClaimComposer:
    @pytest.fixture
    def alimony_payload(self, case_payload) -> dict:
        case_payload["selectedClaims"] = ["alimony"]
        case_payload["children"].extend(
            [
                {"firstName": "איתי", "lastName": "כהן", "idNumber": "333333334", "birthDate": "2016-07-01"},
                {"firstName": "עומר", "lastName": "כהן", "idNumber": "222222226", "birthDate": "2001-01-01"},
            ]
        )
        case_payload["alimony"] = {
            "relationshipDescription": "הקשר התדרדר",
            "childrenLivingWith": "with_applicant",
            "childrenNeeds": [
                {"category": "מזון", "monthlyAmount": 1500},
                {"category": "חינוך", "monthlyAmount": "1001"},
            ],
            "householdNeeds": [
                {"category": "שכירות", "monthlyAmount": "4000"},
                {"category": "חשמל", "monthlyAmount": "500"},
            ],
            "wasPreviousAlimony": "no",
            "hasBankAccounts": "yes",
            "bankAccounts": [{"bankName": "לאומי", "accountNumber": "12345"}],
            "hasVehicle": "yes",
            "vehicleDetails": "מאזדה 3",
        }
        return case_payload

    def test_split_rounds_half_up(self) -> None:
        assert split_evenly(1001, 3) == 334
        assert split_evenly(1001, 2) == 501
        assert split_evenly(1500, 2) == 750

    @pytest.mark.asyncio
    async def test_children_needs_table(self, alimony_payload, fixed_now) -> None:
        nodes = await AlimonyClaimComposer(record(alimony_payload), now=fixed_now).compose()
        tables = [node for node in nodes if isinstance(node, Table) and node.header]

        children, household = tables
        assert children.rows == (
            ("קטגוריה", "נועה כהן", "איתי כהן", 'סה"כ'),
            ("מזון", "₪750", "₪750", "₪1,500"),
            ("חינוך", "₪501", "₪501", "₪1,002"),
            ('סה"כ', "₪1,251", "₪1,251", "₪2,502"),
        )
        assert children.column_widths == (33, 26, 26, 15)
        assert children.totals
        assert household.rows[-1] == ('סה"כ', "₪4,500")
        assert "שכירות: ₪4,000" in document_text(nodes)

    @pytest.mark.asyncio
    async def test_no_table_without_needs(self, case_payload, fixed_now) -> None:
        case_payload["selectedClaims"] = ["alimony"]

        nodes = await AlimonyClaimComposer(record(case_payload), now=fixed_now).compose()

        assert not any(isinstance(node, Table) and node.header for node in nodes)
        assert "צרכי הקטינים:" not in document_text(nodes).split("\n")

    @pytest.mark.asyncio
    async def test_claim_sections(self, alimony_payload, fixed_now) -> None:
        text = document_text(await AlimonyClaimComposer(record(alimony_payload), now=fixed_now).compose())

        assert "התובעת מתכבדת להגיש לכבוד בית המשפט את כתב התביעה בעניין מזונות הקטינים." in text
        assert "361 ₪ לפי סעיף 6ב" in text
        assert "הואיל והתובעת הגישה נגדך תביעה למזונות" in text
        assert "הרצאת פרטים לפי טופס 4" in text
        assert "להם נולדו 2 ילדים" in text
        assert ", כאשר הילדים מתגוררים עם דנה כהן." in text
        assert "3. סעדים זמנים ככל שידרשו." in text
        assert "4. פסיקת מזונות זמנים." in text
        assert 'להיות ב"כ בענין הכנת תביעת מזונות.' in text

    @pytest.mark.asyncio
    async def test_employment_lists_respondent_first(self, alimony_payload, fixed_now) -> None:
        text = document_text(await AlimonyClaimComposer(record(alimony_payload), now=fixed_now).compose())

        assert text.index("השתכרות הנתבע") < text.index("השתכרות התובעת")
        assert "משכורת ברוטו: ₪15,000 לחודש." in text
        assert "התובעת מועסקת אצל חברת הייטק." in text
        assert "משכורת ברוטו: ₪10,000 לחודש." in text

    @pytest.mark.asyncio
    async def test_employment_without_details(self, alimony_payload, fixed_now) -> None:
        alimony_payload["property"] = {}

        text = document_text(await AlimonyClaimComposer(record(alimony_payload), now=fixed_now).compose())

        assert "לא נמסרו פרטים על השתכרות הנתבע." in text
        assert "לא נמסרו פרטים על השתכרות התובעת." in text

    @pytest.mark.asyncio
    async def test_form_4_statement(self, alimony_payload, fixed_now) -> None:
        text = document_text(await AlimonyClaimComposer(record(alimony_payload), now=fixed_now).compose())
        lines = text.split("\n")

        assert "הרצאת פרטים (טופס 4)" in lines
        assert "(בתביעת מזונות)" in lines
        assert "הרצאת פרטים בתובענה בין בני זוג" not in text
        assert f"מתגורר/ת עם:{RLM} דנה כהן" in lines
        assert "• לאומי, חשבון 12345" in lines
        assert f"פרטי הרכב:{RLM} מאזדה 3" in lines
        assert f"צרכי הקטינים:{RLM} ₪2,502" in lines
        assert f"צורכי המדור:{RLM} ₪4,500" in lines

    @pytest.mark.asyncio
    async def test_living_together(self, alimony_payload, fixed_now) -> None:
        alimony_payload["alimony"]["childrenLivingWith"] = "still_together"

        text = document_text(await AlimonyClaimComposer(record(alimony_payload), now=fixed_now).compose())

        assert ", כאשר כל המשפחה מתגוררת יחד." in text
        assert f"מתגורר/ת עם:{RLM} שני ההורים, תחת קורת גג אחת" in text

    @pytest.mark.asyncio
    async def test_relationship_description_is_rewritten(self, alimony_payload, fixed_now) -> None:
        transformer = TaggingTransformer()
        composer = AlimonyClaimComposer(record(alimony_payload), transformer=transformer, now=fixed_now)

        text = document_text(await composer.compose())

        assert transformer.fields == ["תיאור מערכת היחסים"]
        assert "לטענת התובעת, הקשר התדרדר" in text

    def test_page_estimate_grows_with_children(self, alimony_payload, fixed_now) -> None:
        composer = AlimonyClaimComposer(record(alimony_payload), now=fixed_now)

        estimate = composer.estimate_page_count()

        # Claim 5 + 1, Form 4 2 + 1, power of attorney 2, affidavit 1.
        assert estimate.main_document == 6
        assert estimate.toc_page == 12

    @pytest.mark.asyncio
    async def test_appendix_numbering(self, alimony_payload, fixed_now, png_base64) -> None:
        alimony_payload["attachments"] = [{"description": "תלוש שכר", "images": [png_base64]}]

        text = document_text(await AlimonyClaimComposer(record(alimony_payload), now=fixed_now).compose())

        assert "נספח א - תלוש שכר" in text
        assert "עמוד 15" in text


class TestDivorceAgreementComposer:
    @pytest.fixture
    def agreement_payload(self, case_payload, png_base64) -> dict:
        case_payload["selectedClaims"] = ["divorceAgreement"]
        case_payload["divorceAgreement"] = {
            "propertyAgreement": "equalSplit",
            "custodyAgreement": "jointCustody",
            "visitationAgreement": "flexible",
            "alimonyAgreement": "specificAmount",
            "alimonyAmount": "3500",
            "additionalTerms": "כל צד יישא בהוצאותיו",
        }
        case_payload["respondentSignature"] = f"data:image/png;base64,{png_base64}"
        return case_payload

    def test_marriage_duration(self) -> None:
        today = date(2025, 3, 5)

        assert marriage_duration("2010-06-01", today) == " (נישואים בני 15 שנים)"
        assert marriage_duration("2024-06-01", today) == " (נישואים בני שנה)"
        assert marriage_duration("2025-01-01", today) == ""
        assert marriage_duration(None, today) == ""

    @pytest.mark.asyncio
    async def test_opening_and_parties(self, agreement_payload, fixed_now) -> None:
        text = document_text(await DivorceAgreementComposer(record(agreement_payload), now=fixed_now).compose())
        lines = text.split("\n")

        assert lines[0] == "הסכם גירושין"
        assert "בבית המשפט לענייני משפחה" not in lines
        assert "בין:" in lines
        assert "לבין:" in lines
        assert "בעניין הקטין/ה:" in lines
        assert "דנה כהן ויוסי כהן נישאו ביום 01/06/2010 (נישואים בני 15 שנים)." in lines
        assert DETERIORATION.strip() in text
        assert "בני הזוג המסכימים בזאת להתגרש בהסכמה" in text

    @pytest.mark.asyncio
    async def test_lettered_sections(self, agreement_payload, fixed_now) -> None:
        text = document_text(await DivorceAgreementComposer(record(agreement_payload), now=fixed_now).compose())

        titles = [line for line in text.split("\n") if line.startswith("סעיף ")]
        assert titles == [
            "סעיף א - חלוקת רכוש",
            "סעיף ב - משמורת והסדרי ראייה",
            "סעיף ג - מזונות",
            "סעיף ד - תנאים נוספים",
            "סעיף ה - הוראות כלליות",
        ]
        assert PROPERTY_TERMS["equalSplit"] in text
        assert "1. בני הזוג הסכימו על משמורת משותפת על הקטין/ה." in text
        assert "2. הסדרי הראייה יהיו גמישים" in text
        assert "בני הזוג הסכימו כי יוסי כהן ישלם מזונות בסך ₪3,500 לחודש." in text
        assert "כל צד יישא בהוצאותיו" in text

    @pytest.mark.asyncio
    async def test_no_custody_section_without_minors(self, agreement_payload, fixed_now) -> None:
        agreement_payload["children"] = []
        del agreement_payload["divorceAgreement"]["alimonyAgreement"]
        del agreement_payload["divorceAgreement"]["additionalTerms"]

        text = document_text(await DivorceAgreementComposer(record(agreement_payload), now=fixed_now).compose())

        titles = [line for line in text.split("\n") if line.startswith("סעיף ")]
        assert titles == ["סעיף א - חלוקת רכוש", "סעיף ב - הוראות כלליות"]

    @pytest.mark.asyncio
    async def test_reference_needs_the_related_claim(self, agreement_payload, fixed_now) -> None:
        agreement_payload["divorceAgreement"]["propertyAgreement"] = "referenceClaim"

        alone = document_text(await DivorceAgreementComposer(record(agreement_payload), now=fixed_now).compose())
        agreement_payload["selectedClaims"].append("property")
        referenced = document_text(
            await DivorceAgreementComposer(record(agreement_payload), now=fixed_now).compose()
        )

        assert DEFAULT_PROPERTY_TERM in alone
        assert PROPERTY_TERMS["referenceClaim"] in referenced

    @pytest.mark.asyncio
    async def test_feminine_plurals_for_two_women(self, agreement_payload, fixed_now) -> None:
        agreement_payload["respondent"]["gender"] = "female"

        text = document_text(await DivorceAgreementComposer(record(agreement_payload), now=fixed_now).compose())

        assert "בני הזוג המסכימות בזאת" in text
        assert "הם מבינות את כל תנאי ההסכם" in text
        assert "יוסי כהן תשלם מזונות" in text

    @pytest.mark.asyncio
    async def test_both_signatures(self, agreement_payload, fixed_now, png_bytes) -> None:
        nodes = await DivorceAgreementComposer(record(agreement_payload), now=fixed_now).compose()

        claimant = nodes[paragraph_index(nodes, "דנה כהן (אישה)") + 1]
        respondent = nodes[paragraph_index(nodes, "יוסי כהן (בעל)") + 1]
        assert isinstance(claimant, Image)
        assert claimant.alignment is Alignment.START
        assert isinstance(respondent, Image)
        assert respondent.alignment is Alignment.LEFT
        assert respondent.data == png_bytes

    @pytest.mark.asyncio
    async def test_missing_respondent_signature_leaves_a_line(self, agreement_payload, fixed_now) -> None:
        del agreement_payload["respondentSignature"]

        nodes = await DivorceAgreementComposer(record(agreement_payload), now=fixed_now).compose()

        assert isinstance(nodes[paragraph_index(nodes, "יוסי כהן (בעל)") + 1], Paragraph)

    @pytest.mark.asyncio
    async def test_lawyer_confirmation_needs_a_signature(self, agreement_payload, fixed_now, png_base64) -> None:
        settings = EngineSettings(lawyer=LawyerProfile(name="רות לוי", license_number="55555"))

        unsigned = document_text(
            await DivorceAgreementComposer(record(agreement_payload), settings=settings, now=fixed_now).compose()
        )
        agreement_payload["lawyerSignature"] = f"data:image/png;base64,{png_base64}"
        signed = document_text(
            await DivorceAgreementComposer(record(agreement_payload), settings=settings, now=fixed_now).compose()
        )

        assert "אישור עורך דין" not in unsigned
        assert "אישור עורך דין" in signed
        assert 'אני החתום מטה, עוה"ד רות לוי מ"ר 55555' in signed

    @pytest.mark.asyncio
    async def test_form_3_statement(self, agreement_payload, fixed_now) -> None:
        text = document_text(await DivorceAgreementComposer(record(agreement_payload), now=fixed_now).compose())
        lines = text.split("\n")

        assert "הרצאת פרטים בהסכם גירושין" in lines
        assert f"מהות ההסכם:{RLM} הסכם גירושין בהסכמה" in lines
        assert "חתימת המבקשת: דנה כהן" in lines
        assert 'להיות ב"כ בענין הכנת הסכם גירושין.' in text

    @pytest.mark.asyncio
    async def test_custom_fields_are_rewritten(self, agreement_payload, fixed_now) -> None:
        agreement_payload["divorceAgreement"]["propertyAgreement"] = "custom"
        agreement_payload["divorceAgreement"]["propertyCustom"] = "כל אחד לוקח את שלו"
        transformer = TaggingTransformer()
        composer = DivorceAgreementComposer(record(agreement_payload), transformer=transformer, now=fixed_now)

        text = document_text(await composer.compose())

        assert sorted(transformer.fields) == sorted(["חלוקת רכוש", "תנאים נוספים"])
        assert "לטענת התובעת, כל אחד לוקח את שלו" in text

    def test_page_estimate(self, agreement_payload, fixed_now) -> None:
        composer = DivorceAgreementComposer(record(agreement_payload), now=fixed_now)

        # Agreement 3, Form 3 2 + 1, power of attorney 2, affidavit 1.
        assert composer.estimate_page_count().toc_page == 9


class TestBackupComposer:
    @pytest.mark.asyncio
    async def test_reports_every_answer(self, case_payload, fixed_now) -> None:
        case_payload["answers"]["favoriteColor"] = "כחול"

        text = document_text(await BackupComposer(record(case_payload), now=fixed_now).compose())

        assert text.startswith("גיבוי מידע - תשובות מלאות")
        assert f"תאריך הגשה:{RLM} 05/03/2025" in text
        assert f"תביעות שנבחרו:{RLM} תביעה רכושית" in text
        assert "שם מלא: דנה כהן" in text
        assert "מגדר: זכר" in text
        assert "סטטוס מערכת יחסים: נשוי/ה" in text
        assert "תאריך נישואין: 01/06/2010" in text
        assert "ילד/ה 1" in text
        assert "נכונות לגישור: כן" in text
        assert "favoriteColor: כחול" in text
        assert "משכורת ברוטו (מבקש/ת): ₪10000" in text
        assert "שווי: ₪1,000,000" in text

    @pytest.mark.asyncio
    async def test_unselected_claims_are_left_out(self, case_payload, fixed_now) -> None:
        case_payload["alimony"] = {"hasVehicle": "yes"}

        text = document_text(await BackupComposer(record(case_payload), now=fixed_now).compose())

        assert "תביעת מזונות" not in text

    @pytest.mark.asyncio
    async def test_alimony_answers_appear_when_selected(self, case_payload, fixed_now) -> None:
        case_payload["selectedClaims"] = ["alimony", "divorceAgreement"]
        case_payload["alimony"] = {"hasVehicle": "yes"}
        case_payload["divorceAgreement"] = {"alimonyAmount": "3500"}

        text = document_text(await BackupComposer(record(case_payload), now=fixed_now).compose())

        assert "יש רכב: כן" in text
        assert "סכום מזונות: ₪3500" in text
        assert "פרטי רכב: ---" in text

    @pytest.mark.asyncio
    async def test_alimony_needs_and_accounts(self, case_payload, fixed_now) -> None:
        case_payload["selectedClaims"] = ["alimony"]
        case_payload["alimony"] = {
            "childrenNeeds": [{"category": "מזון", "monthlyAmount": "1500"}],
            "householdNeeds": [{"category": "שכירות", "monthlyAmount": "4000"}],
            "bankAccounts": [{"bankName": "לאומי", "accountNumber": "12345", "owner": "דנה כהן"}],
        }

        text = document_text(await BackupComposer(record(case_payload), now=fixed_now).compose())

        assert "צרכי הקטינים: 1. מזון: ₪1500" in text
        assert "צורכי המדור: 1. שכירות: ₪4000" in text
        assert "חשבונות בנק: 1. לאומי 12345 דנה כהן" in text
