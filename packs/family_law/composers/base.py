"""Base class shared by the family-court claim composers."""

from __future__ import annotations

import logging
from datetime import date, datetime

from document_engine.aggregation import count_items
from document_engine.builders import NodeFactory
from document_engine.config import EngineSettings
from document_engine.formatting import is_minor
from document_engine.gender import PartyRole, Terminology, resolve_terms
from document_engine.nodes import Alignment, DocumentNode
from document_engine.styles import StyleConfig
from document_engine.transformer import (
    IdentityTransformer,
    LegalLanguageTransformer,
    TransformContext,
    TransformRequest,
    rewrite_many,
)
from intake.models import CaseRecord, Child, ClaimType
from intake.validation import require_party_names
from packs.family_law.composers import shared

logger = logging.getLogger("claims.composers")


class BaseComposer:
    """Turns one :class:`CaseRecord` into the ordered nodes of one claim.

    Subclasses implement :meth:`build`. Everything a composer needs is passed
    in; nothing is read from globals, so the same record always yields the
    same nodes for the same ``now``.
    """

    claim_type: ClaimType
    terminology: Terminology = Terminology.CLAIM
    # Wording used in the statement of details and the power of attorney.
    form_nature: str = ""
    poa_claim_text: str = ""

    def __init__(
        self,
        case: CaseRecord,
        *,
        settings: EngineSettings | None = None,
        transformer: LegalLanguageTransformer | None = None,
        style: StyleConfig | None = None,
        now: datetime | None = None,
    ) -> None:
        self.case = case
        self.settings = settings or EngineSettings()
        self.transformer = transformer or IdentityTransformer()
        self.style = style or StyleConfig()
        self.nodes = NodeFactory(self.style)
        self.now = now or datetime.now()

        self.claimant = resolve_terms(
            PartyRole.CLAIMANT,
            case.claimant.gender,
            case.claimant.full_name,
            terminology=self.terminology,
            default_sex=self.settings.default_sex,
        )
        self.respondent = resolve_terms(
            PartyRole.RESPONDENT,
            case.respondent.gender,
            case.respondent.full_name,
            terminology=self.terminology,
            default_sex=self.settings.default_sex,
        )

    @property
    def spacing(self):
        return self.style.spacing

    @property
    def today(self) -> date:
        return self.now.date()

    @property
    def minors(self) -> list[Child]:
        return [child for child in self.case.children if is_minor(child.birth_date, self.today)]

    # Transformation -----------------------------------------------------

    def request(
        self,
        text: str | None,
        field_label: str,
        additional_context: str | None = None,
    ) -> TransformRequest:
        context = TransformContext(
            claim_type_label=self.claim_type.label,
            claimant_name=self.claimant.name,
            respondent_name=self.respondent.name,
            field_label=field_label,
            additional_context=additional_context,
        )
        return TransformRequest(text=text, context=context)

    async def rewrite(self, *requests: TransformRequest) -> list[str]:
        """Rewrite independent free-text fields concurrently, in request order."""
        if not requests:
            return []
        logger.debug(f"Rewriting {len(requests)} field(s) with the {self.transformer.name} transformer")
        return await rewrite_many(self.transformer, list(requests))

    # Composition --------------------------------------------------------

    async def compose(self) -> list[DocumentNode]:
        """Validate the record and build the document nodes.

        Raises:
            DocumentGenerationError: If both party names are missing.
        """
        require_party_names(self.case, self.claim_type.label)
        attachments = len(self.case.attachments)
        if attachments:
            logger.info(f"{self.claim_type.label}: received {attachments} attachment(s)")
        else:
            logger.info(f"{self.claim_type.label}: received no attachments")

        nodes = await self.build()
        logger.debug(f"Composed {self.claim_type.value} claim with {len(nodes)} nodes")
        return nodes

    async def build(self) -> list[DocumentNode]:  # pragma: no cover - override hook
        raise NotImplementedError

    # Shared pieces ------------------------------------------------------

    def court_header(self, minors: list[Child] | None = None) -> list[DocumentNode]:
        return shared.court_header(
            self.nodes,
            self.settings,
            self.case,
            self.claimant,
            self.respondent,
            minors=minors,
        )

    def summons(self) -> list[DocumentNode]:
        return shared.summons(self.nodes, self.claimant)

    def child_bullets(self, children: list[Child]) -> list[DocumentNode]:
        return [self.nodes.bullet(shared.child_bullet(child)) for child in children]

    def relationship_section(
        self,
        children: list[Child] | None = None,
        arrangement: str | None = None,
    ) -> list[DocumentNode]:
        return [
            self.nodes.subsection_header("מערכת היחסים"),
            self.nodes.body(
                shared.relationship_narrative(self.case, self.claimant, children, arrangement),
                after=self.spacing.subsection,
            ),
        ]

    def client_signature(self) -> list[DocumentNode]:
        """Client signature (or a blank line) under the claim, then the printed name."""
        name = self.case.claimant.full_name or self.claimant.name
        return [
            self.nodes.body("", before=self.spacing.section, after=0),
            self.nodes.signature_or_placeholder(self.case.client_signature, alignment=Alignment.START),
            self.nodes.body(f"חתימת {name}", after=self.spacing.minimal),
        ]

    def statement_of_details(self) -> list[DocumentNode]:
        return shared.statement_of_details(
            self.nodes,
            self.case,
            self.claimant,
            self.respondent,
            nature=self.form_nature,
            today=self.today,
        )

    def estimate_page_count(self) -> shared.PageEstimate:
        """Page estimate used to number the attachments appendix."""
        items = count_items(self.case.property_answers) if self.case.property_answers else 0
        return shared.estimate_page_count(items, len(self.case.children))

    def toc_page(self) -> int:
        return self.estimate_page_count().toc_page

    def closing_documents(self, statement: list[DocumentNode]) -> list[DocumentNode]:
        """Statement of details, power of attorney, affidavit and any attachments."""
        lawyer = self.settings.lawyer
        section: list[DocumentNode] = [self.nodes.page_break(), *statement, self.nodes.page_break()]
        section.extend(
            shared.power_of_attorney(
                self.nodes,
                lawyer,
                self.case,
                claim_text=self.poa_claim_text,
                today=self.today,
            )
        )
        section.append(self.nodes.page_break())
        section.extend(shared.affidavit(self.nodes, lawyer, self.case, self.claimant, now=self.now))
        if self.case.attachments:
            section.append(self.nodes.page_break())
            section.extend(shared.attachments_section(self.nodes, self.case.attachments, self.toc_page()))
        return section
