from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path

import dotenv
dotenv.load_dotenv()

from street_sweep.config import load_config
from street_sweep.errors import LookupFailure
from street_sweep.pipeline import StreetCleaningPipeline
from street_sweep.utils import EnhancedJSONEncoder

def main(argv=None) -> int:
    root = Path(__file__).resolve().parent
    ap = argparse.ArgumentParser(description="Look up the street cleaning schedule for an address")
    ap.add_argument("address", nargs="+", help="free-text address, e.g. 301 25TH AVE")
    ap.add_argument("--config", default=str(root / "data" / "config.default.json"))
    ap.add_argument("--snapshot", default=None, help="offline snapshot workbook (overrides config)")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    cfg = load_config(args.config)
    if args.snapshot:
        cfg.snapshot_path = args.snapshot

    pipe = StreetCleaningPipeline(cfg)
    try:
        result = pipe.lookup(" ".join(args.address))
    except LookupFailure as exc:
        print(json.dumps({"error": exc.message}, ensure_ascii=False), file=sys.stderr)
        return 1

    print(json.dumps(result.to_response(), cls=EnhancedJSONEncoder, ensure_ascii=False, indent=2))
    print(f"Matched via: {result.tier}", file=sys.stderr)
    return 0

if __name__ == "__main__":
    sys.exit(main())
