"""
REST API for slot allocation.

Exposes the Facility Service to the entry/exit kiosks and the display layer.
The API is documented with OpenAPI automatically by FastAPI. To run the
server:

```
uvicorn api.server:app --reload
```

Endpoints
---------
* ``POST /entry``: Reserve the nearest free slot and return directions.
* ``POST /exit``: Release the plate's slot and return the parking duration.
* ``GET /occupancy/{level}``: Snapshot of occupied slots on a level.
* ``GET /directions/{slot_id}``: Directions to and from any slot.
* ``GET /vehicles/{plate_number}``: Where a parked vehicle is and for how long.
* ``GET /suggestion``: The slot the next entry would receive.
* ``DELETE /slots/{slot_id}``: Administrative release of a slot.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from config.defaults import get_settings
from config.logging_setup import configure_logging
from engine.errors import ParkingError
from engine.facility_service import FacilityService, build_service
from engine.layout import to_slot_id

logger = logging.getLogger(__name__)


class EntryRequest(BaseModel):
    plateNumber: str = Field(..., min_length=1)
    preferredLevel: Optional[str] = None
    excludeLevels: List[str] = Field(default_factory=list)


class EntryResponse(BaseModel):
    slotId: str
    directionsToSlot: List[str]
    directionsToExit: List[str]


class ExitRequest(BaseModel):
    plateNumber: str = Field(..., min_length=1)
    now: Optional[datetime] = None


class ExitResponse(BaseModel):
    durationText: str
    slotId: str
    since: datetime
    exitTime: datetime


class OccupantResponse(BaseModel):
    slotId: str
    plateNumber: str
    since: datetime


class DirectionsResponse(BaseModel):
    slot: str
    fromEntrance: List[str]
    toExit: List[str]


class VehicleResponse(BaseModel):
    plateNumber: str
    slotId: str
    since: datetime
    elapsed: str


class SuggestionResponse(BaseModel):
    slotId: str


def create_app(service: Optional[FacilityService] = None) -> FastAPI:
    """Build the API around a service. Without one, the service is built from configuration at startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if service is None:
            settings = get_settings()
            configure_logging(settings["log_level"])
            app.state.service = build_service(settings)
        else:
            app.state.service = service
        app.state.service.start()
        try:
            yield
        finally:
            app.state.service.stop()

    app = FastAPI(title="ParkSense Slot Allocation API", version="1.0.0", lifespan=lifespan)
    if service is not None:
        app.state.service = service

    @app.exception_handler(ParkingError)
    async def parking_error_handler(request: Request, exc: ParkingError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": type(exc).__name__, "detail": str(exc)},
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": "ValueError", "detail": str(exc)})

    def facility(request: Request) -> FacilityService:
        return request.app.state.service

    @app.post("/entry", response_model=EntryResponse)
    def vehicle_entry(body: EntryRequest, request: Request) -> EntryResponse:
        """Reserve the free slot closest to the entrance for an arriving vehicle."""
        result = facility(request).vehicle_entry(
            body.plateNumber,
            preferred_level=body.preferredLevel,
            exclude_levels=body.excludeLevels,
        )
        return EntryResponse(
            slotId=str(result.slot),
            directionsToSlot=list(result.directions_to_slot),
            directionsToExit=list(result.directions_to_exit),
        )

    @app.post("/exit", response_model=ExitResponse)
    def vehicle_exit(body: ExitRequest, request: Request) -> ExitResponse:
        result = facility(request).vehicle_exit(body.plateNumber, now=body.now)
        return ExitResponse(
            durationText=result.duration_text,
            slotId=str(result.slot),
            since=result.since,
            exitTime=result.released_at,
        )

    @app.get("/occupancy/{level}", response_model=List[OccupantResponse])
    def occupancy(level: str, request: Request) -> List[OccupantResponse]:
        return [
            OccupantResponse(slotId=str(r.slot_id), plateNumber=r.plate_number, since=r.since)
            for r in facility(request).occupancy(level)
        ]

    @app.get("/directions/{slot_id}", response_model=DirectionsResponse)
    def directions(slot_id: str, request: Request) -> DirectionsResponse:
        svc = facility(request)
        slot = to_slot_id(svc.layout, slot_id)
        to_slot, to_exit = svc.directions(slot)
        return DirectionsResponse(slot=str(slot), fromEntrance=to_slot, toExit=to_exit)

    @app.get("/vehicles/{plate_number}", response_model=VehicleResponse)
    def vehicle(plate_number: str, request: Request) -> VehicleResponse:
        svc = facility(request)
        record = svc.vehicle(plate_number)
        return VehicleResponse(
            plateNumber=record.plate_number,
            slotId=str(record.slot_id),
            since=record.since,
            elapsed=svc.elapsed_text(record),
        )

    @app.get("/suggestion", response_model=SuggestionResponse)
    def suggestion(request: Request, preferredLevel: Optional[str] = None) -> SuggestionResponse:
        return SuggestionResponse(slotId=str(facility(request).suggest(preferredLevel)))

    @app.delete("/slots/{slot_id}", response_model=ExitResponse)
    def force_release(slot_id: str, request: Request) -> ExitResponse:
        result = facility(request).force_release(slot_id)
        return ExitResponse(
            durationText=result.duration_text,
            slotId=str(result.slot),
            since=result.since,
            exitTime=result.released_at,
        )

    @app.get("/health")
    def health(request: Request) -> dict:
        svc = facility(request)
        return {"status": "ok", "occupied": len(svc.table), "capacity": svc.layout.capacity}

    return app


app = create_app()
