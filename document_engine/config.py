"""Engine settings read from the environment."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from document_engine.gender import DEFAULT_SEX, Sex
from document_engine.remedies import INCOME_DISPARITY_THRESHOLD
from tools.llm_client import DEFAULT_MODEL

logger = logging.getLogger("claims.config")


@dataclass(frozen=True, slots=True)
class LawyerProfile:
    """Counsel of record printed in court headers, the POA and the affidavit."""

    name: str = "עורך הדין"
    license_number: str = "00000"
    id_number: str = "000000000"
    address: str = "כתובת המשרד"
    phone: str = "03-0000000"
    fax: str = "03-0000000"
    email: str = "office@example.com"


@dataclass(frozen=True, slots=True)
class EngineSettings:
    court_city: str = "בתל אביב"
    judge_name: str = "שופט"
    lawyer: LawyerProfile = field(default_factory=LawyerProfile)
    income_disparity_threshold: float = INCOME_DISPARITY_THRESHOLD
    default_sex: Sex = DEFAULT_SEX
    llm_model: str = DEFAULT_MODEL
    llm_timeout_seconds: float = 30.0
    llm_max_tokens: int = 2000

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EngineSettings:
        """Build settings from ``CLAIMS_*`` environment variables.

        Unset variables keep their defaults. Malformed numeric values are
        logged and ignored.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        base_lawyer = defaults.lawyer

        lawyer = LawyerProfile(
            name=env.get("CLAIMS_LAWYER_NAME", base_lawyer.name),
            license_number=env.get("CLAIMS_LAWYER_LICENSE", base_lawyer.license_number),
            id_number=env.get("CLAIMS_LAWYER_ID", base_lawyer.id_number),
            address=env.get("CLAIMS_LAWYER_ADDRESS", base_lawyer.address),
            phone=env.get("CLAIMS_LAWYER_PHONE", base_lawyer.phone),
            fax=env.get("CLAIMS_LAWYER_FAX", base_lawyer.fax),
            email=env.get("CLAIMS_LAWYER_EMAIL", base_lawyer.email),
        )

        return cls(
            court_city=env.get("CLAIMS_COURT_CITY", defaults.court_city),
            judge_name=env.get("CLAIMS_JUDGE_NAME", defaults.judge_name),
            lawyer=lawyer,
            income_disparity_threshold=_float_env(
                env, "CLAIMS_INCOME_DISPARITY_THRESHOLD", defaults.income_disparity_threshold
            ),
            default_sex=Sex.parse(env.get("CLAIMS_DEFAULT_SEX"), defaults.default_sex),
            llm_model=env.get("CLAIMS_LLM_MODEL", defaults.llm_model),
            llm_timeout_seconds=_float_env(
                env, "CLAIMS_LLM_TIMEOUT_SECONDS", defaults.llm_timeout_seconds
            ),
        )


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}, using {default}")
        return default
