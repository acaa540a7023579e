"""Rewriting of client free text into third-person legal Hebrew.

Composers receive a :class:`LegalLanguageTransformer` and never call it
directly: every call goes through :func:`rewrite_or_fallback`, which keeps the
client's original wording whenever the transformer fails, times out or
returns nothing.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from document_engine.exceptions import TransformerError

if TYPE_CHECKING:
    from tools.llm_client import LLMClient

logger = logging.getLogger("claims.transformer")


@dataclass(frozen=True, slots=True)
class TransformContext:
    claim_type_label: str
    claimant_name: str
    respondent_name: str
    field_label: str
    additional_context: str | None = None


@dataclass(frozen=True, slots=True)
class TransformRequest:
    text: str | None
    context: TransformContext


@runtime_checkable
class LegalLanguageTransformer(Protocol):
    name: str

    async def transform(self, text: str, context: TransformContext) -> str:
        ...


class IdentityTransformer:
    """Returns the client's text untouched."""

    name = "identity"

    async def transform(self, text: str, context: TransformContext) -> str:
        return text


SYSTEM_PROMPT = """אתה עורך דין מומחה בדיני משפחה בישראל. תפקידך להמיר טקסט שכתב לקוח (גוף ראשון) לשפה משפטית מקצועית (גוף שלישי) שתופיע בכתב תביעה.

כללים חשובים:
1. המר מגוף ראשון לגוף שלישי - השתמש ב"המבקש/ת טוען/ת כי..." או "לטענת המבקש/ת..."
2. שמור על העובדות והמידע המדויק מהטקסט המקורי
3. השתמש בשפה משפטית מקצועית אך ברורה
4. שמור על סדר כרונולוגי ועל הקשר לוגי
5. אל תוסיף עובדות או טענות שלא היו בטקסט המקורי
6. הקפד על דקדוק ותחביר תקינים בעברית
7. השתמש במונחים משפטיים מקובלים בדיני משפחה בישראל"""


def build_user_prompt(text: str, context: TransformContext) -> str:
    lines = [
        f"סוג התביעה: {context.claim_type_label}",
        f"שם המבקש/ת: {context.claimant_name}",
        f"שם הנתבע/ת: {context.respondent_name}",
        f"נושא השדה: {context.field_label}",
    ]
    if context.additional_context:
        lines.append(f"הקשר נוסף: {context.additional_context}")
    lines.extend(
        [
            "",
            "טקסט מקורי מהלקוח:",
            '"""',
            text,
            '"""',
            "",
            "המר את הטקסט לשפה משפטית מקצועית בגוף שלישי, כפי שתופיע בכתב תביעה. "
            "החזר רק את הטקסט המומר, ללא הסברים נוספים.",
        ]
    )
    return "\n".join(lines)


class LLMLegalLanguageTransformer:
    """Transformer backed by :class:`tools.llm_client.LLMClient`.

    Args:
        llm_client: Client to use. A default client (stub mode without an
            ``ANTHROPIC_API_KEY``) is created when omitted.
        timeout_seconds: Upper bound for a single rewrite.
        max_tokens: Generation limit per rewrite.
    """

    name = "llm"

    def __init__(
        self,
        llm_client: LLMClient | None = None,
        timeout_seconds: float = 30.0,
        max_tokens: int = 2000,
    ) -> None:
        if llm_client is None:
            from tools.llm_client import get_llm_client

            llm_client = get_llm_client()
        self.llm_client = llm_client
        self.timeout_seconds = timeout_seconds
        self.max_tokens = max_tokens

    @property
    def stub_mode(self) -> bool:
        return bool(getattr(self.llm_client, "stub_mode", False))

    async def transform(self, text: str, context: TransformContext) -> str:
        try:
            return await asyncio.wait_for(
                self.llm_client.generate_text(
                    system_prompt=SYSTEM_PROMPT,
                    user_prompt=build_user_prompt(text, context),
                    max_tokens=self.max_tokens,
                    temperature=0.3,
                ),
                timeout=self.timeout_seconds,
            )
        except TimeoutError as exc:
            raise TransformerError(
                "rewrite",
                f"timed out after {self.timeout_seconds}s",
                details={"field": context.field_label},
            ) from exc


async def rewrite_or_fallback(
    transformer: LegalLanguageTransformer,
    text: str | None,
    context: TransformContext,
) -> str:
    """Rewrite ``text``; on any failure return it unchanged.

    Blank input returns ``""`` without calling the transformer.
    """
    if text is None or not str(text).strip():
        return ""
    original = str(text)
    try:
        rewritten = await transformer.transform(original, context)
    except Exception as exc:
        logger.warning(
            f"Legal-language rewrite failed for '{context.field_label}', keeping original text: {exc}"
        )
        return original
    if not rewritten or not rewritten.strip():
        logger.warning(
            f"Legal-language rewrite returned nothing for '{context.field_label}', keeping original text"
        )
        return original
    return rewritten.strip()


async def rewrite_many(
    transformer: LegalLanguageTransformer,
    requests: list[TransformRequest],
) -> list[str]:
    """Rewrite independent fields concurrently, preserving request order."""
    return list(
        await asyncio.gather(
            *(rewrite_or_fallback(transformer, request.text, request.context) for request in requests)
        )
    )
