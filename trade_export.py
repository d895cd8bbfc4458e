import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema

from trade_buckets import TradeBuckets

LOGGER = logging.getLogger(__name__)
SCHEMA_VERSION = "1.0"
SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "grouped_trades.schema.json"


def load_schema(schema_path: Path = SCHEMA_PATH) -> Dict[str, Any]:
    try:
        with open(schema_path, "r", encoding="utf-8") as schema_file:
            return json.load(schema_file)
    except FileNotFoundError:
        LOGGER.warning("Grouped trades schema not found at %s", schema_path)
        return {}


def _bucket_payload(buckets: TradeBuckets) -> Dict[str, Any]:
    return {
        "winners": [trade._asdict() for trade in buckets.winners],
        "breakeven": [trade._asdict() for trade in buckets.breakeven],
        "losers": [trade._asdict() for trade in buckets.losers],
        "counts": {
            "winners": len(buckets.winners),
            "breakeven": len(buckets.breakeven),
            "losers": len(buckets.losers),
        },
        "net_profit": round(buckets.net_profit(), 2),
    }


def build_payload(
    grouped: Dict[str, TradeBuckets],
    be_tolerance: float,
    source: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "schema_version": SCHEMA_VERSION,
        "be_tolerance": be_tolerance,
        "source": source,
        "exported_at": datetime.now(timezone.utc).isoformat(),
        "instruments": {
            instrument: _bucket_payload(grouped[instrument])
            for instrument in sorted(grouped)
        },
    }


def validate_payload(payload: Dict[str, Any], schema: Optional[Dict[str, Any]] = None) -> bool:
    schema = load_schema() if schema is None else schema
    if not schema:
        return True
    try:
        jsonschema.validate(instance=payload, schema=schema)
        return True
    except jsonschema.ValidationError as exc:
        LOGGER.warning("Grouped trades payload failed validation: %s", exc.message)
        return False


def save_payload(path: Path, payload: Dict[str, Any]) -> Path:
    if not validate_payload(payload):
        raise ValueError(f"Refusing to write invalid grouped trades payload to {path}")
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as output:
        json.dump(payload, output, indent=2)
    return path
