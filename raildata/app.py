"""
FastAPI gateway for the RailData client.

Lifespan manages the httpx client and the RailData client.
Routes: /v1/stations/..., /v1/lines/resolve, /v1/messages,
/v1/trains/{train_id}/stops, /health.
Optional API key authentication on /v1/* endpoints.
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import Depends, FastAPI, HTTPException, Request, Security
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader

from raildata.catalog import line_catalog, station_catalog
from raildata.client import RailDataClient
from raildata.config import Config, load_config
from raildata.errors import BadCredentialsError, MissingCredentialsError, RailDataError
from raildata.models import Line, Station, StationMsg, TrainSchedule, TrainStopList
from raildata.resolution import SearchQuery, resolve

logger = logging.getLogger(__name__)

# Global references set during lifespan
_client: Optional[RailDataClient] = None
_config: Optional[Config] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: load config, create HTTP client and RailData client."""
    global _client, _config

    # Configure logging
    log_level = os.environ.get("LOG_LEVEL", "info").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    _config = load_config()
    logger.info(
        "Loaded config: base_url=%s, timeout=%.1f, token_file=%s, credentials=%s",
        _config.effective_base_url,
        _config.timeout,
        _config.token_file,
        "yes" if _config.username else "no",
    )

    async with httpx.AsyncClient() as http_client:
        _client = RailDataClient.from_config(_config, http_client=http_client)
        logger.info("RailData gateway ready")
        yield
        await _client.aclose()

    _client = None
    _config = None


app = FastAPI(
    title="RailData Gateway",
    version="1.0.0",
    description="""
A small HTTP front end for the NJ Transit RailData API.

## Features

- **Token management**: RailData tokens are reused and refreshed automatically
- **Name resolution**: stations and lines can be given by code, name or abbreviation
- **Normalized data**: typed times, colors and canonical stations and lines

## Authentication

Optional API key via `X-API-Key` header. The `/health` endpoint is always unauthenticated.
    """.strip(),
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "reference",
            "description": "Station and line lookup",
        },
        {
            "name": "trains",
            "description": "Departures, messages and train stops",
        },
        {
            "name": "health",
            "description": "Service health check",
        },
    ],
    docs_url="/docs",
    redoc_url="/redoc",
)


@app.exception_handler(RailDataError)
async def raildata_error_handler(request: Request, exc: RailDataError):
    logger.error("RailData call failed for %s: %s", request.url.path, exc)
    if isinstance(exc, (MissingCredentialsError, BadCredentialsError)):
        detail = f"RailData credentials problem: {exc}"
    else:
        detail = f"RailData error: {exc}"
    return JSONResponse(status_code=502, content={"detail": detail})


# ---------------------------------------------------------------------------
# Authentication dependency
# ---------------------------------------------------------------------------

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def verify_api_key(
    api_key: Optional[str] = Security(api_key_header),
) -> None:
    """Check API key if one is configured."""
    if _config is None or _config.api_key is None:
        return  # No auth configured
    if api_key != _config.api_key:
        raise HTTPException(status_code=401, detail="Invalid or missing API key")


def _get_client() -> RailDataClient:
    if _client is None:
        raise HTTPException(status_code=503, detail="Service not ready")
    return _client


def _station_or_404(code_or_name: str) -> Station:
    station = resolve(SearchQuery(code=code_or_name, name=code_or_name), station_catalog())
    if station is None:
        raise HTTPException(status_code=404, detail=f"Station '{code_or_name}' not found")
    return station


def _line_or_404(code_or_name: str) -> Line:
    line = resolve(SearchQuery(code=code_or_name, name=code_or_name), line_catalog())
    if line is None:
        raise HTTPException(status_code=404, detail=f"Line '{code_or_name}' not found")
    return line


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    tags=["health"],
    summary="Health check",
    response_description="Service is healthy",
)
async def health():
    """
    Health check endpoint for monitoring and Docker health checks.

    Always returns HTTP 200 with a simple JSON response.
    No authentication required.
    """
    return {"status": "healthy"}


@app.get(
    "/v1/stations/resolve",
    response_model=Station,
    dependencies=[Depends(verify_api_key)],
    tags=["reference"],
    summary="Resolve a station",
    responses={404: {"description": "No station matches"}},
)
async def resolve_station(code: Optional[str] = None, name: Optional[str] = None):
    """
    Find a station by 2-character code, full name, short name or a
    misspelled name. Codes win over names.
    """
    station = resolve(SearchQuery(code=code, name=name), station_catalog())
    if station is None:
        raise HTTPException(status_code=404, detail="Station not found")
    return station


@app.get(
    "/v1/lines/resolve",
    response_model=Line,
    dependencies=[Depends(verify_api_key)],
    tags=["reference"],
    summary="Resolve a line",
    responses={404: {"description": "No line matches"}},
)
async def resolve_line(code: Optional[str] = None, name: Optional[str] = None):
    """Find a line by 2-character code, name, abbreviation or a misspelled name."""
    line = resolve(SearchQuery(code=code, name=name), line_catalog())
    if line is None:
        raise HTTPException(status_code=404, detail="Line not found")
    return line


@app.get(
    "/v1/stations/{station}/departures",
    response_model=TrainSchedule,
    dependencies=[Depends(verify_api_key)],
    tags=["trains"],
    summary="Next departures from a station",
    responses={
        404: {"description": "Unknown station or line"},
        502: {"description": "RailData call failed"},
    },
)
async def get_departures(station: str, line: Optional[str] = None):
    """
    Return the next 19 departures from a station, optionally for one line.

    `station` and `line` accept a code or a name, e.g. `NY` or
    `New York Penn Station`, `NE` or `Northeast Corridor`.
    """
    client = _get_client()
    found_station = _station_or_404(station)
    line_code = _line_or_404(line).code if line else None
    return await client.get_train_schedule_19_records(found_station.code, line_code)


@app.get(
    "/v1/messages",
    response_model=list[StationMsg],
    dependencies=[Depends(verify_api_key)],
    tags=["trains"],
    summary="Station and line messages",
    responses={
        404: {"description": "Unknown station or line"},
        502: {"description": "RailData call failed"},
    },
)
async def get_messages(station: Optional[str] = None, line: Optional[str] = None):
    """Return current messages, optionally limited to a station and/or a line."""
    client = _get_client()
    station_code = _station_or_404(station).code if station else None
    line_code = _line_or_404(line).code if line else None
    return await client.get_station_msg(station_code, line_code)


@app.get(
    "/v1/trains/{train_id}/stops",
    response_model=TrainStopList,
    dependencies=[Depends(verify_api_key)],
    tags=["trains"],
    summary="Stops for a train",
    responses={
        404: {"description": "Train not known to RailData"},
        502: {"description": "RailData call failed"},
    },
)
async def get_train_stops(train_id: str):
    """Return the stop list of a train, with times and connecting lines."""
    client = _get_client()
    stops = await client.get_train_stop_list(train_id)
    if stops is None:
        raise HTTPException(status_code=404, detail=f"Train '{train_id}' not found")
    return stops
