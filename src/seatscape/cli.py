"""Command-line entry point for seat recommendations.

    seatscape DEL DXB 2025-08-10T18:30
    seatscape SFO DEL 2025-01-01T00:00 --prefer avoid --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from seatscape.airports import AirportLookupError, AirportNotFoundError
from seatscape.cities import DEFAULT_THRESHOLD_KM, detect_city_pass_bys, load_city_catalog
from seatscape.compute import DEFAULT_SAMPLE_MINUTES, PREFERENCES, InputError, run
from seatscape.export import pass_by_to_dict, recommendation_to_dict
from seatscape.models import QueryInput
from seatscape.sun import EphemerisSunModel, sun_position
from seatscape.summary import share_text

log = logging.getLogger(__name__)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seatscape",
        description="Pick the window seat side with (or without) the sun.",
    )
    parser.add_argument("origin", help="Origin IATA code, e.g. DEL")
    parser.add_argument("dest", help="Destination IATA code, e.g. DXB")
    parser.add_argument("depart", help="Local departure time, YYYY-MM-DDTHH:MM")
    parser.add_argument("--arrive", help="Local arrival time at the destination")
    parser.add_argument("--prefer", choices=PREFERENCES, default="see")
    parser.add_argument("--step", type=int, default=DEFAULT_SAMPLE_MINUTES,
                        help="Sampling step in minutes")
    parser.add_argument("--threshold", type=float, default=DEFAULT_THRESHOLD_KM,
                        help="Pass-by distance threshold in km")
    parser.add_argument("--precise", action="store_true",
                        help="Use the skyfield ephemeris instead of the NOAA model")
    parser.add_argument("--png", type=Path, nargs="?", const=True, default=None,
                        help="Save a sun-altitude PNG (optional path)")
    parser.add_argument("--json", action="store_true", help="Print JSON output")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = _parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    query = QueryInput(
        origin=args.origin.upper(),
        dest=args.dest.upper(),
        depart=args.depart,
        preference=args.prefer,
        arrive=args.arrive,
        sample_minutes=args.step,
    )
    catalog = load_city_catalog()
    sun_model = EphemerisSunModel() if args.precise else sun_position
    try:
        context, rec = run(query, places=catalog, sun_model=sun_model)
    except (InputError, AirportNotFoundError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except AirportLookupError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    pass_bys = detect_city_pass_bys(rec.samples, catalog, args.threshold)

    if args.json:
        payload = recommendation_to_dict(rec, include_samples=False)
        payload["passBys"] = [pass_by_to_dict(p) for p in pass_bys]
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print(share_text(rec, context.origin, context.dest, args.prefer))
        for p in pass_bys:
            print(f"  {p.name}: {p.side}, ~{p.distance_km} km")

    if args.png is not None:
        # matplotlib is only needed for PNG output
        from seatscape.renderers.static import save_static_profile

        out = save_static_profile(rec, None if args.png is True else args.png)
        log.info("Saved sun profile to %s", out)
        print(f"Saved: {out}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
