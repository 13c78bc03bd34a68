"""Run the schedule suggestion engine on a JSON snapshot and print the plan.

The snapshot has the same shape as the POST /api/schedule-suggestions body.

Run:
  PYTHONPATH=backend python scripts/generate_suggestion.py snapshot.json
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from app.core.exceptions import SchedulerError
from app.schemas.suggestion import GenerateSuggestionRequest, GenerationConstraints
from app.services.suggestion_engine import generate_schedule_plan


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a schedule suggestion from a snapshot file")
    parser.add_argument("snapshot", type=Path, help="Path to the JSON snapshot")
    parser.add_argument("--min-demand", type=int, default=None, help="Override the minimum demand threshold")
    parser.add_argument("--max-load", type=int, default=None, help="Override the maximum professor load")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    payload = GenerateSuggestionRequest.model_validate_json(args.snapshot.read_text(encoding="utf-8"))
    overrides = {}
    if args.min_demand is not None:
        overrides["min_demand_threshold"] = args.min_demand
    if args.max_load is not None:
        overrides["max_professor_load"] = args.max_load
    base = payload.constraints.model_dump() if payload.constraints is not None else {}
    constraints = GenerationConstraints.model_validate({**base, **overrides})

    try:
        plan = generate_schedule_plan(
            course_id=payload.course_id,
            semester=payload.semester,
            interests=payload.student_interests,
            availabilities=payload.professor_availabilities,
            subjects=payload.subjects,
            constraints=constraints,
        )
    except SchedulerError as exc:
        print(json.dumps({"message": exc.message, "details": exc.details}, indent=2))
        return 1

    print(json.dumps(plan.model_dump(mode="json"), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
