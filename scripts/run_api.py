#!/usr/bin/env python
"""
Run the Offer Pricing API with uvicorn.

Usage:
    python scripts/run_api.py [--catalog catalog.csv] [--strict] [--port 8000]

Catalog and strictness are handed to the app through the OFFER_PRICING_*
environment variables read by Settings.load().
"""
import argparse
import os
import sys
from pathlib import Path

import uvicorn

SRC_PATH = Path(__file__).resolve().parent.parent / 'src'


def configure_environment(args: argparse.Namespace) -> None:
    """Expose src/ and the CLI options to the (possibly reloaded) server process."""
    paths = [str(SRC_PATH)] + [p for p in os.environ.get('PYTHONPATH', '').split(os.pathsep) if p]
    os.environ['PYTHONPATH'] = os.pathsep.join(paths)
    if str(SRC_PATH) not in sys.path:
        sys.path.insert(0, str(SRC_PATH))

    if args.catalog:
        os.environ['OFFER_PRICING_CATALOG'] = str(args.catalog.resolve())
    if args.strict:
        os.environ['OFFER_PRICING_STRICT'] = 'true'


def main(argv=None):
    parser = argparse.ArgumentParser(description="Start the Offer Pricing API")
    parser.add_argument("--catalog", type=Path, help="Product catalog (CSV or XLSX)")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--strict", action="store_true", help="Reject unparsable price fields")
    parser.add_argument("--no-reload", dest="reload", action="store_false")
    args = parser.parse_args(argv)

    configure_environment(args)
    print(f"Offer Pricing API on http://{args.host}:{args.port} (catalog: {args.catalog or 'none'})")
    uvicorn.run("offer_pricing.api.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
