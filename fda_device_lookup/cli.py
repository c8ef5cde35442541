"""Resolve a free-text device description to an FDA product classification."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Sequence

from .classification.service import ClassificationService
from .core.config import Settings, get_settings
from .core.logging import configure_logging
from .core.models import SearchFilters


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="fda-classify", description=__doc__)
    parser.add_argument("query", nargs="+", help="Device description or 3-letter product code.")
    parser.add_argument("--device-class", choices=("1", "2", "3"), help="Only return classifications of this device class.")
    parser.add_argument("--limit", type=int, help="Classification results per search (1-50).")
    parser.add_argument("--log-level", choices=("DEBUG", "INFO", "WARNING", "ERROR"), help="Override the configured log level.")
    parser.add_argument("--show-trace", action="store_true", help="Include every search the resolver issued.")
    args = parser.parse_args(argv)
    if args.limit is not None and not 1 <= args.limit <= 50:
        parser.error("--limit must be between 1 and 50")
    return args


def main(argv: Sequence[str] | None = None, *, settings: Settings | None = None, service: ClassificationService | None = None) -> int:
    args = parse_args(argv)
    resolved_settings = settings or get_settings()
    if args.limit is not None:
        resolved_settings = resolved_settings.model_copy(update={"result_limit": args.limit})
    configure_logging(args.log_level, settings=resolved_settings)

    query = " ".join(args.query)
    if not query.strip():
        sys.stderr.write("fda-classify: error: query must contain at least one term\n")
        return 2
    owns_service = service is None
    service = service or ClassificationService(resolved_settings)
    try:
        resolution = service.resolve(query, SearchFilters(device_class=args.device_class))
    finally:
        if owns_service:
            service.close()

    json.dump(resolution.as_dict(include_trace=args.show_trace), sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0 if resolution.resolved else 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
