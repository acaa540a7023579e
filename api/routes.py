"""Document endpoints: claim generation, backup Q&A and the claim catalogue."""

import logging
import os
from typing import Any

from fastapi import APIRouter, Body, Query, Request, Response
from slowapi import Limiter
from slowapi.util import get_remote_address

from document_engine.config import EngineSettings
from document_engine.renderers import OutputFormat
from document_engine.transformer import LLMLegalLanguageTransformer
from packs.family_law.factory import ClaimDocumentFactory, GeneratedDocument
from tools.llm_client import LLMClient

logger = logging.getLogger("claims.api")

limiter = Limiter(key_func=get_remote_address)
DOCUMENT_RATE_LIMIT = os.getenv("DOCUMENT_RATE_LIMIT", "60/minute")

router = APIRouter()


def build_factory() -> ClaimDocumentFactory:
    """Factory wired from the environment; stub rewriting without an API key."""
    settings = EngineSettings.from_env()
    transformer = LLMLegalLanguageTransformer(
        LLMClient(model=settings.llm_model),
        timeout_seconds=settings.llm_timeout_seconds,
        max_tokens=settings.llm_max_tokens,
    )
    return ClaimDocumentFactory(settings=settings, transformer=transformer)


def get_factory(request: Request) -> ClaimDocumentFactory:
    factory = getattr(request.app.state, "factory", None)
    if factory is None:
        factory = build_factory()
        request.app.state.factory = factory
    return factory


def document_response(document: GeneratedDocument) -> Response:
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{document.filename}"',
            "X-Document-Type": document.document_type,
        },
    )


@router.get("/templates")
async def list_templates(request: Request) -> dict[str, Any]:
    """Claim types with their composers, output formats and the rewriting mode."""
    factory = get_factory(request)
    transformer = factory.transformer
    return {
        "claim_types": factory.available_claim_types(),
        "formats": [fmt.value for fmt in OutputFormat],
        "transformer": {
            "name": transformer.name,
            "stub_mode": bool(getattr(transformer, "stub_mode", False)),
        },
    }


# Declared before the claim route so "backup" is not read as a claim type.
@router.post("/backup")
@limiter.limit(DOCUMENT_RATE_LIMIT)
async def generate_backup(
    request: Request,
    case: dict[str, Any] = Body(...),
    output_format: OutputFormat = Query(OutputFormat.DOCX, alias="format"),
) -> Response:
    document = await get_factory(request).backup(case, output_format=output_format)
    return document_response(document)


@router.post("/{claim_type}")
@limiter.limit(DOCUMENT_RATE_LIMIT)
async def generate_claim(
    request: Request,
    claim_type: str,
    case: dict[str, Any] = Body(...),
    output_format: OutputFormat = Query(OutputFormat.DOCX, alias="format"),
) -> Response:
    """Compose one claim with its closing documents and return it as a download."""
    logger.info(f"Claim requested: {claim_type} | request_id={getattr(request.state, 'request_id', 'unknown')}")
    document = await get_factory(request).generate(case, claim_type, output_format=output_format)
    return document_response(document)
