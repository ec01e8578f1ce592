#!/usr/bin/env python3
"""
Export the gateway's OpenAPI document and JSON schemas for the RailData models.

Writes, under the output directory (default: api/ at the repo root):
- openapi.json - the gateway's HTTP interface
- schemas/<Model>.json - normalized models as the gateway serializes them
- wire/<method>.json - RailData response payloads as the client accepts them

Rerun after changing raildata/models.py or the wire models in raildata/api.py.
"""

import argparse
import json
import sys
from pathlib import Path

from pydantic import TypeAdapter

# Add project root to path
repo_root = Path(__file__).parent.parent
sys.path.insert(0, str(repo_root))

from raildata import api
from raildata.app import app
from raildata.models import (
    Line,
    Station,
    StationMsg,
    TrainSchedule,
    TrainStopList,
    VehicleData,
)

GATEWAY_MODELS = (Station, Line, StationMsg, TrainSchedule, TrainStopList, VehicleData)

WIRE_METHODS = (
    api.GET_TOKEN,
    api.IS_VALID_TOKEN,
    api.GET_STATION_LIST,
    api.GET_STATION_MSG,
    api.GET_STATION_SCHEDULE,
    api.GET_TRAIN_SCHEDULE,
    api.GET_TRAIN_SCHEDULE_19_REC,
    api.GET_TRAIN_STOP_LIST,
    api.GET_VEHICLE_DATA,
)


def _write_json(path: Path, document: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(document, f, indent=2)
    print(f"[OK] {path}")


def export_openapi(output_dir: Path):
    _write_json(output_dir / "openapi.json", app.openapi())


def export_model_schemas(output_dir: Path):
    """One schema per normalized model, in serialization mode."""
    for model in GATEWAY_MODELS:
        schema = model.model_json_schema(mode="serialization")
        _write_json(output_dir / "schemas" / f"{model.__name__}.json", schema)


def export_wire_schemas(output_dir: Path):
    """One schema per RailData method, keyed by the upstream field names."""
    for method in WIRE_METHODS:
        schema = TypeAdapter(method.response_type).json_schema(by_alias=True)
        _write_json(output_dir / "wire" / f"{method.name}.json", schema)


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument(
        "--output",
        type=Path,
        default=repo_root / "api",
        help="directory to write into (default: %(default)s)",
    )
    args = parser.parse_args(argv)

    export_openapi(args.output)
    export_model_schemas(args.output)
    export_wire_schemas(args.output)


if __name__ == "__main__":
    main()
