"""Shared fixtures: a realistic intake record and a tiny PNG for signatures."""

from __future__ import annotations

import base64
import copy
from datetime import datetime
from typing import Any

import pytest

from intake.models import CaseRecord

# 1x1 transparent PNG.
PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)
PNG_BYTES = base64.b64decode(PNG_BASE64)

FIXED_NOW = datetime(2025, 3, 5, 10, 30)

BASE_PAYLOAD: dict[str, Any] = {
    "claimant": {
        "fullName": "דנה כהן",
        "idNumber": "123456782",
        "address": "הרצל 1, חיפה",
        "phone": "050-1111111",
        "email": "dana@example.com",
        "birthDate": "1985-04-12",
        "gender": "female",
    },
    "respondent": {
        "fullName": "יוסי כהן",
        "idNumber": "987654321",
        "address": "ביאליק 5, חיפה",
        "phone": "050-2222222",
        "birthDate": "1983-09-30",
        "gender": "male",
    },
    "relationshipType": "married",
    "weddingDate": "2010-06-01",
    "selectedClaims": ["property"],
    "children": [
        {
            "firstName": "נועה",
            "lastName": "כהן",
            "idNumber": "111111118",
            "birthDate": "2014-02-20",
            "address": "הרצל 1, חיפה",
        }
    ],
    "answers": {
        "livingSeparately": "yes",
        "separationDate": "2024-01-15",
        "contactedWelfare": "no",
        "willingToJoinMediation": True,
    },
    "property": {
        "apartments": [
            {"description": "דירת מגורים ברחוב הרצל", "value": "1,000,000", "owner": "שניהם", "purchaseDate": "2012-05-01"},
            {"description": "דירה להשקעה", "value": "500000", "owner": "דנה כהן"},
        ],
        "debts": [
            {"description": "משכנתא", "amount": "20000", "debtor": "יוסי כהן"},
        ],
        "applicantEmploymentStatus": "employee",
        "applicantEmployer": "חברת הייטק",
        "applicantGrossSalary": "10000",
        "respondentEmploymentStatus": "employee",
        "respondentGrossSalary": "15000",
    },
    "signature": f"data:image/png;base64,{PNG_BASE64}",
}


@pytest.fixture
def case_payload() -> dict[str, Any]:
    """A property-claim intake payload; each test gets its own copy."""
    return copy.deepcopy(BASE_PAYLOAD)


@pytest.fixture
def case_record(case_payload: dict[str, Any]) -> CaseRecord:
    return CaseRecord.model_validate(case_payload)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def png_base64() -> str:
    return PNG_BASE64
