"""Kommandozeilen-Einstiegspunkte für zugferd-de."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from zugferd_de.errors import InvoiceValidationError, RenderError
from zugferd_de.generators.pipeline import InvoiceDocumentGenerator
from zugferd_de.models.enums import DocumentProfile, Language
from zugferd_de.models.invoice import Invoice
from zugferd_de.validators.profiles import validate_invoice


def _read_json(path: str) -> object:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        print(f"{path}: {exc}", file=sys.stderr)
        sys.exit(2)


def _generate_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zugferd-generate",
        description="Erzeugt eine ZUGFeRD/XRechnung-Hybridrechnung aus JSON.",
    )
    parser.add_argument("input", help="Rechnung als JSON-Datei")
    parser.add_argument("-o", "--output", required=True, help="Ziel-PDF")
    parser.add_argument("--xml", help="XML zusätzlich separat speichern")
    parser.add_argument(
        "--language",
        choices=[lang.value for lang in Language],
        default=Language.DE.value,
        help="Sprache der Darstellung (Standard: de)",
    )
    parser.add_argument("--strict", action="store_true", help="XRechnung-Regeln (BR-DE) prüfen")
    parser.add_argument(
        "--profile",
        choices=[profile.value for profile in DocumentProfile],
        default=None,
        help="Profil des XML (Standard: DEFAULT_PROFILE)",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def _validate_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zugferd-validate",
        description="Prüft eine Rechnung (JSON) und gibt den Bericht als JSON aus.",
    )
    parser.add_argument("input", help="Rechnung als JSON-Datei")
    parser.add_argument("--strict", action="store_true", help="XRechnung-Regeln (BR-DE) prüfen")
    return parser


def generate(argv: list[str] | None = None) -> None:
    """Einstiegspunkt für den Befehl `zugferd-generate`."""
    args = _generate_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        invoice = Invoice.model_validate(_read_json(args.input))
    except ValidationError as exc:
        for error in exc.errors():
            location = ".".join(str(part) for part in error["loc"])
            print(f"{location}: {error['msg']}", file=sys.stderr)
        sys.exit(1)

    generator = InvoiceDocumentGenerator(profile=args.profile, strict=args.strict)
    try:
        result = asyncio.run(generator.generate(invoice, language=Language(args.language)))
    except InvoiceValidationError as exc:
        for error in exc.errors:
            print(error, file=sys.stderr)
        sys.exit(1)
    except RenderError as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(1)

    result.save(args.output)
    if args.xml:
        Path(args.xml).write_bytes(result.xml_bytes)
    for warning in result.warnings:
        print(f"Warnung: {warning}", file=sys.stderr)
    print(args.output)


def validate(argv: list[str] | None = None) -> None:
    """Einstiegspunkt für den Befehl `zugferd-validate`."""
    args = _validate_parser().parse_args(argv)
    data = _read_json(args.input)
    if not isinstance(data, dict):
        print(f"{args.input}: JSON-Objekt erwartet", file=sys.stderr)
        sys.exit(2)

    report = validate_invoice(data, strict=args.strict)
    print(report.model_dump_json(indent=2))
    sys.exit(0 if report.valid else 1)
