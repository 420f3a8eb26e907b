"""
Command line entry point.

    risk-engine evaluate submission.json [--json] [--store DIR] [--user-id ID]
    risk-engine config

A submission file holds {"profile": {...}, "assessment": {...}}.
"""

import argparse
import json
import sys
from pathlib import Path

from pydantic import BaseModel, ValidationError
from rich.console import Console

from risk_engine.config import get_config, print_config_summary
from risk_engine.domain.models import HealthAssessment, Profile
from risk_engine.errors import RiskEngineError
from risk_engine.logging_setup import configure_logging
from risk_engine.report import render_outcome
from risk_engine.services.assessment import AssessmentService, Submission
from risk_engine.store import JsonFileRecordStore, build_store


class SubmissionFile(BaseModel):
    profile: Profile
    assessment: HealthAssessment


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="risk-engine",
        description="Score health risks and build lifestyle recommendation plans",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    evaluate = subparsers.add_parser("evaluate", help="Evaluate a submission file")
    evaluate.add_argument("file", type=Path, help="JSON file with profile and assessment")
    evaluate.add_argument("--json", action="store_true", help="Print the outcome as JSON")
    evaluate.add_argument(
        "--store", type=Path, help="Persist results under this directory (overrides STORE_BACKEND)"
    )
    evaluate.add_argument("--user-id", default="local-user", help="Owner of stored records")

    subparsers.add_parser("config", help="Print the configuration summary")
    return parser


def _load_submission(path: Path) -> SubmissionFile:
    return SubmissionFile.model_validate_json(path.read_text(encoding="utf-8"))


def run_evaluate(args: argparse.Namespace, console: Console) -> int:
    try:
        data = _load_submission(args.file)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"Cannot read {args.file}: {e}", style="red")
        return 1
    except ValidationError as e:
        console.print(f"Invalid submission in {args.file}:", style="red")
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            console.print(f"  {location}: {error['msg']}", style="red")
        return 1

    config = get_config()
    store = JsonFileRecordStore(args.store) if args.store else build_store(config.store)
    service = AssessmentService(store=store, config=config.engine)

    result = service.submit(
        Submission(user_id=args.user_id, assessment=data.assessment, profile=data.profile)
    )
    if result.is_err():
        error: RiskEngineError = result.unwrap_err()
        console.print(f"Assessment failed: {error}", style="red")
        return 1

    record = result.unwrap()
    if args.json:
        print(json.dumps(record.outcome.model_dump(mode="json"), indent=2, ensure_ascii=False))
    else:
        render_outcome(record.outcome, console)
        if isinstance(store, JsonFileRecordStore) and config.engine.persist_results:
            console.print(f"Stored assessment {record.assessment_id}", style="dim")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = get_config()
    configure_logging(config.logging)

    if args.command == "config":
        print_config_summary()
        return 0

    return run_evaluate(args, Console())


if __name__ == "__main__":
    sys.exit(main())
