#  Entry point for CycleStreets journey processing
"""
Plan a journey with CycleStreets.net and return it as a per-segment table.

Usage:
    python src/cyclestreets.py --from -1.55,53.80 --to -1.76,53.80 --output route.geojson
    python src/cyclestreets.py --input journey.json --output route.csv

The API key is read from the CYCLESTREETS environment variable by the
command line and ``run`` entry points only; ``journey`` takes it explicitly.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple

import pandas as pd

from common.config import (
    BASE_URL,
    DEFAULT_COLS,
    DEFAULT_COLS_EXTRA,
    DISTANCE_CUTOFF,
    GRADIENT_CUTOFF,
    PLANS,
    SMOOTHING_WINDOW,
    get_globals,
)
from common.errors import RouteProcessingError
from common.logging_utils import logger
from fetch.journey import Point, get_journey
from transform.assemble import json_to_route_table
from transform.export import to_geojson, write_route_table
from transform.transform_utils import build_response


def journey(
    from_point: Point,
    to_point: Point,
    plan: str = "fastest",
    silent: bool = True,
    api_key: Optional[str] = None,
    base_url: str = BASE_URL,
    reporterrors: bool = True,
    save_raw: bool = False,
    cols: Optional[Sequence[str]] = DEFAULT_COLS,
    cols_extra: Optional[Sequence[str]] = DEFAULT_COLS_EXTRA,
    smooth_gradient: bool = True,
    distance_cutoff: float = DISTANCE_CUTOFF,
    gradient_cutoff: float = GRADIENT_CUTOFF,
    n: int = SMOOTHING_WINDOW,
):
    """
    Plan a journey with CycleStreets.net.

    Returns the route table from :func:`transform.assemble.json_to_route_table`,
    or the parsed JSON when ``save_raw`` is True.
    """
    obj = get_journey(
        from_point,
        to_point,
        plan=plan,
        api_key=api_key,
        base_url=base_url,
        reporterrors=reporterrors,
        silent=silent,
    )
    if save_raw:
        return obj

    return json_to_route_table(
        obj,
        cols=cols,
        cols_extra=cols_extra,
        smooth_gradient=smooth_gradient,
        distance_cutoff=distance_cutoff,
        gradient_cutoff=gradient_cutoff,
        n=n,
    )


def _table_options(request: Dict[str, Any]) -> Dict[str, Any]:
    all_columns = bool(request.get("all_columns", False))
    return {
        "cols": None if all_columns else request.get("cols", DEFAULT_COLS),
        "cols_extra": None if all_columns else request.get("cols_extra", DEFAULT_COLS_EXTRA),
        "smooth_gradient": bool(request.get("smooth_gradient", True)),
        "distance_cutoff": float(request.get("distance_cutoff", DISTANCE_CUTOFF)),
        "gradient_cutoff": float(request.get("gradient_cutoff", GRADIENT_CUTOFF)),
        "n": int(request.get("n", SMOOTHING_WINDOW)),
    }


def run(request: Dict[str, Any]) -> Tuple[Dict[str, Any], int]:
    """
    Handle a journey request and return ``(body, http_code)``.

    The request holds either ``from`` and ``to`` points (fetched with the
    environment's API key) or a ``journey`` payload already retrieved.
    """
    cfg = get_globals()

    try:
        options = _table_options(request)
        if "journey" in request:
            obj = request["journey"]
        else:
            obj = get_journey(
                request["from"],
                request["to"],
                plan=request.get("plan", "fastest"),
                api_key=request.get("api_key") or cfg["api_key"],
                base_url=cfg["base_url"],
            )
        table = json_to_route_table(obj, **options)

    except KeyError as exc:
        logger.error("Journey request missing field: %s", exc)
        return build_response("error", 400, error=f"missing field: {exc}")
    except (RouteProcessingError, ValueError) as exc:
        logger.error("Journey processing failed: %s", exc)
        return build_response("error", 422, error=str(exc))
    except Exception as exc:
        logger.exception("Journey run failed")
        return build_response("error", 500, error=str(exc))

    return build_response(
        "ok",
        rows=len(table),
        columns=list(table.columns),
        route=to_geojson(table),
    )


def _load_json(path: str) -> Dict[str, Any]:
    with open(path, encoding="utf-8") as fh:
        return json.load(fh)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="CycleStreets journey to per-segment route table")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--from", dest="from_point", help="Origin as LON,LAT (requires --to)")
    source.add_argument("--input", help="Saved journey JSON to convert instead of calling the API")
    parser.add_argument("--to", dest="to_point", help="Destination as LON,LAT")
    parser.add_argument("--plan", default="fastest", choices=PLANS)
    parser.add_argument("--output", help="Write the table to a .csv or .geojson file")
    parser.add_argument("--save-raw", help="Write the raw journey JSON to this path")
    parser.add_argument("--no-smooth", action="store_true", help="Skip anomalous gradient smoothing")
    parser.add_argument("--distance-cutoff", type=float, default=DISTANCE_CUTOFF)
    parser.add_argument("--gradient-cutoff", type=float, default=GRADIENT_CUTOFF)
    parser.add_argument("--window", type=int, default=SMOOTHING_WINDOW, help="Odd smoothing window size")
    parser.add_argument("--all-columns", action="store_true", help="Keep every available column")
    parser.add_argument("--verbose", action="store_true", help="Log the request URL")
    args = parser.parse_args(argv)

    if args.from_point and not args.to_point:
        parser.error("--from requires --to")

    cfg = get_globals()

    try:
        if args.input:
            obj = _load_json(args.input)
        else:
            obj = get_journey(
                args.from_point,
                args.to_point,
                plan=args.plan,
                api_key=cfg["api_key"],
                base_url=cfg["base_url"],
                silent=not args.verbose,
            )

        if args.save_raw:
            Path(args.save_raw).write_text(json.dumps(obj), encoding="utf-8")
            logger.info("Saved raw journey to %s", args.save_raw)

        table = json_to_route_table(
            obj,
            cols=None if args.all_columns else DEFAULT_COLS,
            cols_extra=None if args.all_columns else DEFAULT_COLS_EXTRA,
            smooth_gradient=not args.no_smooth,
            distance_cutoff=args.distance_cutoff,
            gradient_cutoff=args.gradient_cutoff,
            n=args.window,
        )

        if args.output:
            write_route_table(table, args.output)
        else:
            with pd.option_context("display.max_columns", None, "display.width", 200):
                print(table.drop(columns=["geometry"]))
    except (RouteProcessingError, ValueError, OSError) as exc:
        logger.error("Journey failed: %s", exc)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
