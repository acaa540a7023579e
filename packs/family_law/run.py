"""Command-line entry point for the family-court document pack."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import yaml

from document_engine.config import EngineSettings
from document_engine.exceptions import EngineError
from document_engine.renderers import OutputFormat
from document_engine.transformer import IdentityTransformer, LLMLegalLanguageTransformer
from intake.models import ClaimType
from intake.validation import validate_case
from packs.family_law.factory import ClaimDocumentFactory, GeneratedDocument
from packs.family_law.registry import available_claim_types
from tools.llm_client import LLMClient

logger = logging.getLogger("claims.cli")


def load_case(path: Path) -> dict[str, Any]:
    """Load a case payload from a YAML or JSON file."""

    if not path.exists() or not path.is_file():
        raise FileNotFoundError(f"Case file '{path}' does not exist")

    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    elif suffix == ".json":
        data = json.loads(path.read_text(encoding="utf-8"))
    else:
        raise ValueError("Case files must be YAML or JSON")

    if data is None:
        raise ValueError("Case file is empty")
    if not isinstance(data, dict):
        raise ValueError("Case file must contain an object at the top level")

    return data.get("case") if isinstance(data.get("case"), dict) else data


def build_factory(output_format: str, *, rewrite: bool = True) -> ClaimDocumentFactory:
    settings = EngineSettings.from_env()
    if rewrite:
        transformer = LLMLegalLanguageTransformer(
            LLMClient(model=settings.llm_model),
            timeout_seconds=settings.llm_timeout_seconds,
            max_tokens=settings.llm_max_tokens,
        )
    else:
        transformer = IdentityTransformer()
    return ClaimDocumentFactory(settings=settings, transformer=transformer, output_format=output_format)


def persist_outputs(documents: list[GeneratedDocument], output_root: Path) -> list[Path]:
    output_root.mkdir(parents=True, exist_ok=True)
    saved_paths: list[Path] = []
    for document in documents:
        path = output_root / document.filename
        path.write_bytes(document.content)
        saved_paths.append(path)
    return saved_paths


async def generate_all(
    factory: ClaimDocumentFactory,
    payload: dict[str, Any],
    claims: list[str],
    *,
    backup: bool,
) -> list[GeneratedDocument]:
    """Generate each requested claim, then the backup document if asked."""
    record = validate_case(payload)
    documents = [await factory.generate(record, claim) for claim in claims]
    if backup:
        documents.append(await factory.backup(record))
    return documents


def _requested_claims(args: argparse.Namespace, payload: dict[str, Any]) -> list[str]:
    if args.claim:
        return args.claim
    selected = payload.get("selectedClaims") or payload.get("selected_claims") or []
    supported = set(available_claim_types())
    return [claim for claim in selected if claim in supported]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate family-court claim documents from an intake record",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Every selected claim
  python -m packs.family_law.run case.json

  # One claim as plain text, without rewriting free text
  python -m packs.family_law.run case.yaml --claim property --format text --no-rewrite

  # Only the backup Q&A document
  python -m packs.family_law.run case.json --backup-only
        """,
    )
    parser.add_argument("case", type=Path, help="Path to the case YAML or JSON file")
    parser.add_argument(
        "--claim",
        action="append",
        choices=[claim.value for claim in ClaimType],
        help="Claim type to generate (repeatable; default: the record's selected claims)",
    )
    parser.add_argument("--backup", action="store_true", help="Also generate the backup Q&A document")
    parser.add_argument("--backup-only", action="store_true", help="Generate only the backup Q&A document")
    parser.add_argument("--output", type=Path, default=Path("outputs"), help="Output directory (default: outputs/)")
    parser.add_argument(
        "--format",
        choices=[fmt.value for fmt in OutputFormat],
        default=OutputFormat.DOCX.value,
        help="Output format (default: docx)",
    )
    parser.add_argument("--no-rewrite", action="store_true", help="Keep free text exactly as entered")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    try:
        payload = load_case(args.case)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as exc:
        parser.error(str(exc))

    claims = [] if args.backup_only else _requested_claims(args, payload)
    backup = args.backup or args.backup_only
    if not claims and not backup:
        parser.error("No claim was selected (use --claim or --backup)")

    factory = build_factory(args.format, rewrite=not args.no_rewrite)
    try:
        documents = asyncio.run(generate_all(factory, payload, claims, backup=backup))
    except EngineError as exc:
        print(f"✗ {exc.message}")
        for key, value in exc.details.items():
            print(f"  {key}: {value}")
        return 1

    saved_paths = persist_outputs(documents, args.output)
    print("Generation complete. Documents saved to:")
    for path in saved_paths:
        print(f" - {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
