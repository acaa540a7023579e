"""Input validation for case records.

Wraps the Pydantic models in :mod:`intake.models` and raises the engine's own
exceptions on failure.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from document_engine.exceptions import DocumentGenerationError, ValidationError
from intake.models import CaseRecord

logger = logging.getLogger("claims.intake.validation")


def validate_case(payload: CaseRecord | dict[str, Any] | None) -> CaseRecord:
    """Validate a case payload.

    Accepts either the structured record (``claimant``/``respondent`` ...) or
    the flat intake shape with ``basicInfo`` and ``formData``.

    Args:
        payload: The case payload to validate.

    Returns:
        The validated case record. The caller's payload is never modified.

    Raises:
        ValidationError: If the payload is invalid.
    """
    if isinstance(payload, CaseRecord):
        return payload

    if payload is None:
        raise ValidationError("Case payload is required", field="case")

    if not isinstance(payload, dict):
        raise ValidationError(
            f"Case must be a dictionary, got {type(payload).__name__}",
            field="case",
            value=type(payload).__name__,
        )

    try:
        if "basicInfo" in payload:
            return CaseRecord.from_intake(
                payload["basicInfo"] or {},
                payload.get("formData"),
                selected_claims=payload.get("selectedClaims"),
                signature=payload.get("signature"),
                respondent_signature=payload.get("respondentSignature"),
                lawyer_signature=payload.get("lawyerSignature"),
                attachments=payload.get("attachments"),
                submitted_at=payload.get("submittedAt"),
            )
        return CaseRecord.model_validate(payload)
    except PydanticValidationError as e:
        errors = e.errors(include_input=False)
        if errors:
            first_error = errors[0]
            field_path = ".".join(str(loc) for loc in first_error.get("loc", []))
            message = first_error.get("msg", "Validation failed")
            raise ValidationError(
                f"Invalid case: {message}",
                field=field_path,
                details={"pydantic_errors": [_plain_error(error) for error in errors[:5]]},
            ) from e
        raise ValidationError("Invalid case payload") from e


def _plain_error(error: dict[str, Any]) -> dict[str, Any]:
    # Keep only JSON-safe keys; ctx may hold exception instances.
    return {key: error[key] for key in ("type", "loc", "msg") if key in error}


def require_party_names(case: CaseRecord, document_type: str) -> None:
    """Refuse to compose when neither party is named.

    Raises:
        DocumentGenerationError: If both party names are absent.
    """
    claimant = (case.claimant.full_name or "").strip()
    respondent = (case.respondent.full_name or "").strip()
    if not claimant and not respondent:
        logger.error(f"Refusing to compose {document_type}: both party names are missing")
        raise DocumentGenerationError(document_type, "both party names are missing")
