"""
FastAPI backend for Marine Nav.

This provides REST API endpoints for coordinate conversion, distance and
bearing calculations, magnetic variation and route planning, enabling
framework-agnostic frontend development.
"""

from fastapi import FastAPI, UploadFile, File, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, Field
from typing import List, Optional
from types import SimpleNamespace
from datetime import date, datetime, timezone
import logging
import io
import sys
import os

# Add parent directory to path to import our modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.settings import (
    APP_NAME, APP_VERSION, APP_DESCRIPTION, CORS_ORIGINS, MAX_UPLOAD_SIZE_BYTES,
    ALLOWED_GPX_SUFFIXES, ALLOWED_CSV_SUFFIXES, DEFAULT_ROUTE_NAME, DEFAULT_PLANNING_MODE,
    LOGGING_CONFIG, RouteConfig, FormatConfig
)

# Initialize logging
logging.basicConfig(**LOGGING_CONFIG)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=f"{APP_NAME} API",
    description=APP_DESCRIPTION,
    version=APP_VERSION
)

# Add CORS middleware for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# Import our services
from services.magvar_service import get_magvar_service
from services.route_service import get_route_service, RouteRequest, WaypointInput
from core.calculations import nautical_to_statute_miles
from core.csv_io import load_waypoints_csv
from core.gpx import load_gpx_waypoints
from core.models.coordinate import Waypoint
from core.models.route import Leg
from core.parsing import parse, parse_coordinate, CoordinateFormatter, CoordinatePrecision, CoordinateFormat
from core.route.planning import PlanningModeFactory
from core.validation import ValidationError, validate_file_upload


# Pydantic models for API requests/responses
class CoordinateText(BaseModel):
    latitude: str
    longitude: str


class PrecisionModel(BaseModel):
    decimal_degrees: int = Field(FormatConfig.DECIMAL_DEGREES_PRECISION, ge=0, le=10)
    decimal_minutes: int = Field(FormatConfig.DECIMAL_MINUTES_PRECISION, ge=0, le=10)
    seconds: int = Field(FormatConfig.SECONDS_PRECISION, ge=0, le=10)


class ConvertRequest(BaseModel):
    text: str
    is_latitude: bool = True
    include_hemisphere: bool = True
    precision: Optional[PrecisionModel] = None


class ConvertResponse(BaseModel):
    value: float
    dd: str
    ddm: str
    dms: str


class InverseRequest(BaseModel):
    origin: CoordinateText
    destination: CoordinateText
    use_rhumb_line: bool = False


class InverseResponse(BaseModel):
    distance_meters: float
    distance_nm: float
    distance_statute_miles: float
    initial_bearing: float
    final_bearing: float
    cardinal: str
    method: str
    converged: bool


class DestinationRequest(BaseModel):
    start: CoordinateText
    bearing: float
    distance_nm: float = Field(..., ge=0)
    use_rhumb_line: bool = False


class DestinationResponse(BaseModel):
    latitude: float
    longitude: float
    formatted: List[str]


class MagVarRequest(BaseModel):
    latitude: str
    longitude: str
    altitude_m: float = 0.0
    calculation_date: Optional[date] = None


class MagVarResponse(BaseModel):
    declination: float
    formatted_declination: str
    high_confidence: bool
    available: bool
    reason: Optional[str]
    calculation_date: date
    latitude: float
    longitude: float
    model: str


class WaypointModel(BaseModel):
    name: str = ""
    latitude: str
    longitude: str


class RouteRequestModel(BaseModel):
    name: str = DEFAULT_ROUTE_NAME
    waypoints: List[WaypointModel]
    mode: str = DEFAULT_PLANNING_MODE
    speed_knots: Optional[float] = Field(None, ge=0, le=RouteConfig.MAX_SPEED_KNOTS)
    departure_time: Optional[datetime] = None
    arrival_time: Optional[datetime] = None
    use_rhumb_line: bool = False
    calculation_date: Optional[date] = None


class LegResponse(BaseModel):
    number: int
    from_name: str
    to_name: str
    distance_nm: float
    true_bearing: float
    cardinal: str
    variation: Optional[float]
    magnetic_course: Optional[float]
    leg_hours: Optional[float]
    eta: Optional[datetime]
    method: str


class RouteResponse(BaseModel):
    name: str
    mode: str
    speed_knots: Optional[float]
    departure_time: Optional[datetime]
    arrival_time: Optional[datetime]
    total_distance_nm: float
    total_hours: Optional[float]
    final_eta: Optional[datetime]
    legs: List[LegResponse]


class WaypointResponse(BaseModel):
    id: str
    name: str
    latitude: float
    longitude: float


def _to_route_request(body: RouteRequestModel) -> RouteRequest:
    return RouteRequest(
        waypoints=[WaypointInput(w.name, w.latitude, w.longitude) for w in body.waypoints],
        name=body.name,
        mode=body.mode,
        speed_knots=body.speed_knots,
        departure_time=body.departure_time,
        arrival_time=body.arrival_time,
        use_rhumb_line=body.use_rhumb_line,
        calculation_date=body.calculation_date,
    )


def _leg_response(number: int, leg: Leg) -> LegResponse:
    return LegResponse(
        number=number,
        from_name=leg.from_waypoint.name,
        to_name=leg.to_waypoint.name,
        distance_nm=leg.distance_nm,
        true_bearing=leg.true_bearing,
        cardinal=leg.cardinal,
        variation=leg.variation,
        magnetic_course=leg.magnetic_course,
        leg_hours=leg.leg_hours,
        eta=leg.eta,
        method=leg.method.value,
    )


def _waypoint_response(waypoint: Waypoint) -> WaypointResponse:
    return WaypointResponse(**waypoint.to_dict())


async def _read_upload(file: UploadFile, allowed_suffixes) -> io.BytesIO:
    """Read an upload after checking its name and size."""
    content = await file.read()
    upload = SimpleNamespace(name=file.filename or "", size=len(content))

    validate_file_upload(upload, allowed_suffixes=allowed_suffixes, max_size=MAX_UPLOAD_SIZE_BYTES)
    if not content:
        raise ValidationError("File appears to be empty")
    return io.BytesIO(content)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": f"{APP_NAME} API",
        "version": APP_VERSION,
        "endpoints": {
            "POST /api/convert": "Convert coordinate text between DD, DDM and DMS",
            "POST /api/inverse": "Distance and bearing between two coordinates",
            "POST /api/destination": "Project a point along a geodesic or constant bearing",
            "POST /api/magvar": "Magnetic declination at a coordinate",
            "POST /api/route": "Plan a route",
            "POST /api/route/export/csv": "Export a planned route as CSV",
            "POST /api/route/export/gpx": "Export route waypoints as GPX",
            "POST /api/import/gpx": "Import waypoints from a GPX file",
            "POST /api/import/csv": "Import waypoints from a CSV file",
            "GET /api/health": "Health check endpoint"
        }
    }


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "marine-nav-api"}


@app.get("/api/config")
async def get_config():
    """Get default configuration values."""
    return {
        "defaults": {
            **RouteConfig.as_dict(),
            **FormatConfig.as_dict(),
        },
        "planning_modes": PlanningModeFactory.get_available_modes(),
        "ranges": {
            "speed_knots": {"min": 0, "max": RouteConfig.MAX_SPEED_KNOTS, "step": 0.1},
            "bearing": {"min": 0, "max": 359.9, "step": 0.1},
            "precision": {"min": 0, "max": 10, "step": 1}
        }
    }


@app.post("/api/convert", response_model=ConvertResponse)
async def convert_coordinate(request: ConvertRequest):
    """
    Parse coordinate text and render it in every notation.

    Args:
        request: Text, axis and optional precision

    Returns:
        Decimal value plus DD, DDM and DMS strings
    """
    try:
        precision = CoordinatePrecision(**request.precision.model_dump()) if request.precision else None
        formatter = CoordinateFormatter(precision)
        value = parse(request.text, request.is_latitude)

        return ConvertResponse(
            value=value,
            dd=formatter.format(value, request.is_latitude, CoordinateFormat.DECIMAL_DEGREES,
                                request.include_hemisphere),
            ddm=formatter.format(value, request.is_latitude, CoordinateFormat.DEGREES_DECIMAL_MINUTES,
                                 request.include_hemisphere),
            dms=formatter.format(value, request.is_latitude, CoordinateFormat.DEGREES_MINUTES_SECONDS,
                                 request.include_hemisphere),
        )

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error converting coordinate: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error converting coordinate: {str(e)}")


@app.post("/api/inverse", response_model=InverseResponse)
async def calculate_inverse(request: InverseRequest):
    """Distance and bearings between two coordinates given as text."""
    try:
        service = get_route_service()
        origin = parse_coordinate(request.origin.latitude, request.origin.longitude)
        target = parse_coordinate(request.destination.latitude, request.destination.longitude)
        result = service.solve(origin, target, request.use_rhumb_line)

        return InverseResponse(
            distance_meters=result.distance_meters,
            distance_nm=result.distance_nm,
            distance_statute_miles=nautical_to_statute_miles(result.distance_nm),
            initial_bearing=result.initial_azimuth,
            final_bearing=result.final_azimuth,
            cardinal=service.cardinal(result.initial_azimuth),
            method=result.method.value,
            converged=result.converged,
        )

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error calculating distance: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error calculating distance: {str(e)}")


@app.post("/api/destination", response_model=DestinationResponse)
async def calculate_destination(request: DestinationRequest):
    """Project a point along a geodesic or rhumb line."""
    try:
        service = get_route_service()
        start = parse_coordinate(request.start.latitude, request.start.longitude)
        end = service.project(start, request.bearing, request.distance_nm, request.use_rhumb_line)

        return DestinationResponse(
            latitude=end.latitude,
            longitude=end.longitude,
            formatted=list(CoordinateFormatter().format_coordinate(end)),
        )

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error calculating destination: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error calculating destination: {str(e)}")


@app.post("/api/magvar", response_model=MagVarResponse)
async def magnetic_variation(request: MagVarRequest):
    """Magnetic declination and availability at a coordinate."""
    try:
        coordinate = parse_coordinate(request.latitude, request.longitude)
        calculation_date = request.calculation_date or datetime.now(timezone.utc).date()

        service = get_magvar_service(calculation_date)
        variation = service.get_declination(coordinate, request.altitude_m)
        available, reason = service.check_availability(coordinate)

        return MagVarResponse(
            declination=variation.declination,
            formatted_declination=variation.formatted_declination,
            high_confidence=variation.high_confidence,
            available=available,
            reason=reason,
            calculation_date=variation.calculation_date,
            latitude=variation.latitude,
            longitude=variation.longitude,
            model=variation.model,
        )

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error calculating magnetic variation: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error calculating magnetic variation: {str(e)}")


@app.post("/api/route", response_model=RouteResponse)
async def plan_route(request: RouteRequestModel):
    """
    Plan a route in arrival, departure or speed mode.

    Args:
        request: Named waypoints as text, mode and timing inputs

    Returns:
        Legs with bearings, magnetic course and timing, plus route totals
    """
    try:
        plan = get_route_service().plan(_to_route_request(request))
        route = plan.route
        total_time = route.total_time

        return RouteResponse(
            name=route.name,
            mode=plan.mode,
            speed_knots=plan.speed_knots,
            departure_time=plan.departure_time,
            arrival_time=plan.arrival_time,
            total_distance_nm=route.total_distance_nm,
            total_hours=total_time.total_seconds() / 3600.0 if total_time is not None else None,
            final_eta=route.final_eta,
            legs=[_leg_response(number, leg) for number, leg in enumerate(route.legs, start=1)],
        )

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error planning route: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error planning route: {str(e)}")


@app.post("/api/route/export/csv")
async def export_route_csv(request: RouteRequestModel):
    """Plan a route and return it as a CSV document."""
    try:
        content = get_route_service().export_csv(_to_route_request(request))
        return Response(content=content, media_type="text/csv")

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error exporting CSV: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error exporting CSV: {str(e)}")


@app.post("/api/route/export/gpx")
async def export_route_gpx(request: RouteRequestModel):
    """Return the route waypoints as a GPX 1.1 document."""
    try:
        content = get_route_service().export_gpx(_to_route_request(request))
        return Response(content=content, media_type="application/gpx+xml")

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error exporting GPX: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error exporting GPX: {str(e)}")


@app.post("/api/import/gpx", response_model=List[WaypointResponse])
async def import_gpx(file: UploadFile = File(...)):
    """Load waypoints (and non-duplicate route points) from a GPX file."""
    try:
        logger.info(f"Processing file: {file.filename}")
        file_obj = await _read_upload(file, ALLOWED_GPX_SUFFIXES)
        return [_waypoint_response(w) for w in load_gpx_waypoints(file_obj)]

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error importing GPX: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error importing GPX: {str(e)}")


@app.post("/api/import/csv", response_model=List[WaypointResponse])
async def import_csv(file: UploadFile = File(...)):
    """Load waypoints from a Name,Latitude,Longitude CSV file."""
    try:
        logger.info(f"Processing file: {file.filename}")
        file_obj = await _read_upload(file, ALLOWED_CSV_SUFFIXES)
        return [_waypoint_response(w) for w in load_waypoints_csv(file_obj)]

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error importing CSV: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error importing CSV: {str(e)}")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
