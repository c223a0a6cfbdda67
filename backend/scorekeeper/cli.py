#!/usr/bin/env python3
"""Replay a file of scoring events and print the resulting match snapshot."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from .exceptions import ValidationError
from .logging_utils import configure_logging
from .scoring import tennis
from .services.validation import validate_match_state

logger = logging.getLogger(__name__)


def _load_json(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as fh:
            return json.load(fh)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"{path} is not valid JSON: {exc.msg}") from exc
    except UnicodeDecodeError as exc:
        raise ValidationError(f"{path} is not UTF-8 encoded text.") from exc
    except OSError as exc:
        raise ValidationError(f"{path} could not be read: {exc.strerror or exc}") from exc


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "events",
        type=Path,
        help="JSON file holding a list of events, e.g. "
        '[{"kind": "PointScored", "player": "Player1"}]',
    )
    parser.add_argument(
        "--state",
        type=Path,
        help="JSON snapshot to resume from (defaults to a new match)",
    )
    parser.add_argument("--log-level", help="Override SCOREKEEPER_LOG_LEVEL")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    configure_logging(args.log_level)

    try:
        state = validate_match_state(_load_json(args.state)) if args.state else None
        events = _load_json(args.events)
        if not isinstance(events, list):
            raise ValidationError("Events file must contain a JSON list.")
        final = tennis.replay(events, state)
    except ValidationError as exc:
        logger.info("Replay rejected: %s", exc.detail)
        print(exc.to_problem().model_dump_json(indent=2), file=sys.stderr)
        return 2

    print(json.dumps(tennis.summary(final), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
