"""Claim Document Factory - validate, compose and render in one call.

Typical use::

    factory = ClaimDocumentFactory(settings=EngineSettings.from_env())
    document = await factory.generate(case_payload, "property")
    Path(document.filename).write_bytes(document.content)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from document_engine.config import EngineSettings
from document_engine.nodes import DocumentNode
from document_engine.renderers import OutputFormat, get_renderer
from document_engine.styles import StyleConfig
from document_engine.transformer import IdentityTransformer, LegalLanguageTransformer
from intake.models import CaseRecord, ClaimType
from intake.validation import validate_case
from packs.family_law.composers import BackupComposer
from packs.family_law.registry import get_claim_template, get_composer, list_claim_types

logger = logging.getLogger("claims.engine")

BACKUP_DOCUMENT = "backup"


@dataclass
class GeneratedDocument:
    """A rendered document ready to be written or downloaded."""

    document_type: str
    filename: str
    content: bytes
    media_type: str
    node_count: int

    def to_dict(self) -> dict[str, Any]:
        """Metadata for serialization; the content itself is left out."""
        return {
            "document_type": self.document_type,
            "filename": self.filename,
            "media_type": self.media_type,
            "size_bytes": len(self.content),
            "node_count": self.node_count,
        }


class ClaimDocumentFactory:
    """Compose and render family-court documents.

    Settings, the transformer and the style are explicit values; nothing is
    read from globals, so concurrent requests never share state.

    Example:
        factory = ClaimDocumentFactory(transformer=LLMLegalLanguageTransformer())
        doc = await factory.generate(case, ClaimType.DIVORCE)
    """

    def __init__(
        self,
        settings: EngineSettings | None = None,
        transformer: LegalLanguageTransformer | None = None,
        style: StyleConfig | None = None,
        output_format: OutputFormat | str = OutputFormat.DOCX,
    ):
        self.settings = settings or EngineSettings()
        self.transformer = transformer or IdentityTransformer()
        self.style = style or StyleConfig()
        self.output_format = OutputFormat(output_format)

    async def compose(
        self,
        case: CaseRecord | dict[str, Any],
        claim_type: ClaimType | str,
        *,
        now: datetime | None = None,
    ) -> list[DocumentNode]:
        """Build the node sequence for one claim.

        Raises:
            ValidationError: If the case payload is invalid.
            UnsupportedClaimTypeError: If the claim type has no composer.
            DocumentGenerationError: If both party names are missing.
        """
        composer_class = get_composer(claim_type)
        record = validate_case(case)
        composer = composer_class(
            record,
            settings=self.settings,
            transformer=self.transformer,
            style=self.style,
            now=now,
        )
        return await composer.compose()

    async def generate(
        self,
        case: CaseRecord | dict[str, Any],
        claim_type: ClaimType | str,
        *,
        now: datetime | None = None,
        output_format: OutputFormat | str | None = None,
    ) -> GeneratedDocument:
        now = now or datetime.now()
        claim = get_claim_template(claim_type).claim_type
        logger.info(f"Generating {claim.value} claim (transformer: {self.transformer.name})")
        nodes = await self.compose(case, claim, now=now)
        return self._render(claim.value, nodes, now, output_format)

    async def backup(
        self,
        case: CaseRecord | dict[str, Any],
        *,
        now: datetime | None = None,
        output_format: OutputFormat | str | None = None,
    ) -> GeneratedDocument:
        """Render the backup Q&A document with every intake answer."""
        now = now or datetime.now()
        record = validate_case(case)
        nodes = await BackupComposer(record, style=self.style, now=now).compose()
        return self._render(BACKUP_DOCUMENT, nodes, now, output_format)

    def _render(
        self,
        document_type: str,
        nodes: list[DocumentNode],
        now: datetime,
        output_format: OutputFormat | str | None,
    ) -> GeneratedDocument:
        renderer = get_renderer(output_format or self.output_format, self.style)
        content = renderer.render(nodes)
        filename = f"{document_type}_{now.strftime('%Y%m%d%H%M%S')}.{renderer.extension}"
        logger.info(f"Rendered {filename} ({len(content)} bytes)")
        return GeneratedDocument(
            document_type=document_type,
            filename=filename,
            content=content,
            media_type=renderer.media_type,
            node_count=len(nodes),
        )

    @staticmethod
    def available_claim_types() -> list[dict[str, Any]]:
        """List every known claim type with its availability."""
        return list_claim_types()


# Convenience function for simple usage
async def generate_claim_document(
    case: CaseRecord | dict[str, Any],
    claim_type: ClaimType | str,
    **kwargs,
) -> GeneratedDocument:
    """Generate one claim with default settings and no rewriting.

    Args:
        case: The case record or raw intake payload.
        claim_type: The claim to compose.
        **kwargs: Passed to :meth:`ClaimDocumentFactory.generate` (``now``, ``output_format``).
    """
    factory = ClaimDocumentFactory()
    return await factory.generate(case, claim_type, **kwargs)
