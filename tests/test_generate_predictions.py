import json

from backend.meghdoot.reference_data import ZONES
from scripts.generate_predictions import main


def test_writes_snapshot(tmp_path):
    out = tmp_path / "snapshot.json"
    snapshot = main(["--as-of", "2024-06-15", "--threshold", "0", "--out", str(out)])

    saved = json.loads(out.read_text())
    assert saved["as_of"] == "2024-06-15"
    assert len(saved["predictions"]) == len(ZONES)
    assert len(saved["alerts"]) == len(ZONES)
    assert saved["summary"]["total_zones"] == len(ZONES)
    assert snapshot["threshold"] == 0
