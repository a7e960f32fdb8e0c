"""
Part 450 Licensing Portal — Main Entry Point

Extract fields from a mission description and print a compliance report:
    python -m part450_portal.main extract path/to/mission.txt

Check an existing field map (JSON object of canonical field → value):
    python -m part450_portal.main check path/to/fields.json

Run the built-in lunar lander demo:
    python -m part450_portal.main demo

Run as an API server (for the frontend):
    python -m part450_portal.main --serve
    # or: uvicorn part450_portal.api:app --reload --port 8000

Or import and run programmatically:
    from part450_portal.main import run
    report = run("path/to/mission.txt")
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from part450_portal.compliance.engine import ComplianceEngine
from part450_portal.config import get_settings
from part450_portal.extraction.field_aliases import FORM_SECTIONS, field_label
from part450_portal.extraction.response_extractor import ResponseExtractor
from part450_portal.models.schemas import ComplianceReport
from part450_portal.samples import SAMPLE_MISSION_TEXT
from part450_portal.utils.logger import setup_logging


def run(file_path: str = "") -> ComplianceReport:
    """Extract fields from a mission text file (or the sample) and score them."""
    setup_logging(get_settings().log_level)
    logger = logging.getLogger(__name__)

    logger.info("=" * 60)
    logger.info("  PART 450 PRE-APPLICATION CHECK")
    logger.info(f"  Source: {file_path or 'built-in sample'} | Started: {datetime.now(timezone.utc).isoformat()}")
    logger.info("=" * 60)

    text = Path(file_path).read_text(encoding="utf-8") if file_path else SAMPLE_MISSION_TEXT
    fields = ResponseExtractor().extract(text)
    _print_fields(fields)
    return check(fields)


def check(fields: dict[str, str]) -> ComplianceReport:
    """Score a field map and print the report summary."""
    report = ComplianceEngine().generate_compliance_report(fields)
    _print_report(report)
    return report


def check_file(file_path: str) -> ComplianceReport:
    setup_logging(get_settings().log_level)
    data = json.loads(Path(file_path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{file_path} must contain a JSON object of field → value")
    return check(data)


def _print_fields(fields: dict[str, str]) -> None:
    logger = logging.getLogger(__name__)
    logger.info(f"  Extracted {len(fields)} field(s)")
    for section in FORM_SECTIONS:
        present = [f for f in section.fields if f.value in fields]
        if not present:
            continue
        logger.info(f"  {section.title}")
        for field in present:
            value = fields[field.value]
            logger.info(f"    {field_label(field):<28} {value[:70]}{'…' if len(value) > 70 else ''}")


def _print_report(report: ComplianceReport) -> None:
    """Print a human-readable summary of the compliance report."""
    logger = logging.getLogger(__name__)

    logger.info("")
    logger.info("-" * 60)
    logger.info("  COMPLIANCE REPORT")
    logger.info("-" * 60)
    logger.info(f"  Score:          {report.score}/100")
    logger.info(f"  Passed:         {report.passed}")
    for category, bucket in report.summary.items():
        logger.info(f"  {category.value:<15} passed={bucket.passed} failed={bucket.failed}")

    for issue in report.issues:
        logger.info(f"  [{issue.severity.value.upper()}] {issue.field.value}: {issue.message} ({issue.regulation})")
        logger.info(f"      fix: {issue.fix}")
    for warning in report.warnings:
        logger.info(f"  WARNING: {warning}")
    for rec in report.recommendations:
        logger.info(f"  Recommendation: {rec}")
    logger.info("-" * 60)


def serve(host: str = "0.0.0.0", port: int = 8000) -> None:
    """Start the FastAPI server (for frontend communication)."""
    import uvicorn

    setup_logging(get_settings().log_level)
    logger = logging.getLogger(__name__)
    logger.info(f"Starting API server on {host}:{port}")
    uvicorn.run("part450_portal.api:app", host=host, port=port, reload=get_settings().debug)


def cli(argv: list[str]) -> None:
    if "--serve" in argv:
        serve()
        return
    command = argv[1] if len(argv) > 1 else "demo"
    target = argv[2] if len(argv) > 2 else ""
    if command == "extract":
        run(target)
    elif command == "check" and target:
        check_file(target)
    elif command == "demo":
        run("")
    else:
        # Bare file path, as in `python -m part450_portal mission.txt`
        run(command)


def main() -> None:
    cli(sys.argv)


if __name__ == "__main__":
    main()
