# scripts/generate_predictions.py
"""
Run the risk engine once over the current observation window and write a
JSON snapshot of every zone plus the alerts at or above the threshold.

Usage:
    python -m scripts.generate_predictions
    python -m scripts.generate_predictions --as-of 2022-06-17 --threshold 60 --out /tmp/snapshot.json
"""

import argparse
import json
from datetime import date, datetime
from pathlib import Path

from backend.meghdoot.alerts import alerts_from_predictions
from backend.meghdoot.config import ALERT_THRESHOLD, PREDICTIONS_PATH
from backend.meghdoot.flood_compute import summarize, run_predictions
from backend.meghdoot.logging_setup import logger
from backend.meghdoot.observations import ObservationProvider

def build_snapshot(as_of=None, threshold=ALERT_THRESHOLD):
    provider = ObservationProvider(as_of=as_of)
    predictions = run_predictions(provider)
    alerts = alerts_from_predictions(predictions, threshold)
    return {
        "project": "Meghdoot",
        "generated_at": datetime.utcnow().isoformat() + "Z",
        "as_of": provider.reference_date.isoformat(),
        "threshold": threshold,
        "summary": summarize(predictions).model_dump(),
        "predictions": [p.model_dump() for p in predictions],
        "alerts": [a.model_dump() for a in alerts],
    }

def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate a Meghdoot flood risk snapshot")
    parser.add_argument("--as-of", type=date.fromisoformat, default=None, help="reference date (YYYY-MM-DD), default today")
    parser.add_argument("--threshold", type=int, default=ALERT_THRESHOLD, help="minimum risk score for an alert")
    parser.add_argument("--out", type=Path, default=PREDICTIONS_PATH, help="output JSON path")
    args = parser.parse_args(argv)

    snapshot = build_snapshot(args.as_of, args.threshold)

    args.out.parent.mkdir(parents=True, exist_ok=True)
    with open(args.out, "w", encoding="utf-8") as f:
        json.dump(snapshot, f, indent=2)
    logger.info(f"[generate_predictions] Wrote {len(snapshot['predictions'])} predictions, "
                f"{len(snapshot['alerts'])} alerts -> {args.out}")
    print(f"Generated {len(snapshot['predictions'])} predictions ({len(snapshot['alerts'])} alerts) -> {args.out}")
    return snapshot

if __name__ == "__main__":
    main()
