"""
FastAPI REST API for the Weather Likelihood Platform

Provides RESTful endpoints for weather likelihood queries.
"""

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, Field, StringConstraints, model_validator
from typing import Annotated, Any, List, Optional, Dict, Tuple
from datetime import date as Date, datetime
import logging
import sys
import os

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.api_connectors import NominatimConnector, OpenMeteoConnector, OpenMeteoError
from src.likelihood_scoring import LikelihoodScorer
from src.likelihood_scoring import export
from src.models import ConditionRecord

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Weather Likelihood API",
    description="Likelihood of sunny, cold, rainy, windy, stormy and uncomfortable weather",
    version="1.0.0"
)

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize connectors
geocoder = NominatimConnector()
weather_connector = OpenMeteoConnector()
likelihood_scorer = LikelihoodScorer()


# Pydantic models
class LocationInput(BaseModel):
    query: Optional[str] = Field(None, min_length=1, description="Place name to geocode")
    latitude: Optional[float] = Field(None, ge=-90, le=90, description="Latitude (-90 to 90)")
    longitude: Optional[float] = Field(None, ge=-180, le=180, description="Longitude (-180 to 180)")
    date: Optional[Date] = Field(None, description="Day to score, defaults to today")

    @model_validator(mode="after")
    def check_location(self):
        if self.query is None and (self.latitude is None or self.longitude is None):
            raise ValueError("Provide either query or both latitude and longitude")
        return self


class ConditionModel(BaseModel):
    condition: str
    probability: int
    severity: str
    description: str
    actual_value: Optional[float] = None
    unit: Optional[str] = None


class LikelihoodResponse(BaseModel):
    location: str
    latitude: float
    longitude: float
    date: Date
    historical: bool
    conditions: List[ConditionModel]
    dominant_condition: Optional[ConditionModel]
    alerts: List[Dict[str, Any]]
    summary: Dict[str, Any]
    timestamp: datetime


class ComparisonInput(BaseModel):
    locations: List[Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]] = Field(
        ..., min_length=2, description="First entry is the primary location"
    )
    date: Optional[Date] = None


class ComparisonResponse(BaseModel):
    date: Date
    primary: Dict[str, Any]
    comparisons: List[Dict[str, Any]]
    timestamp: datetime


# Helpers

def resolve_location(
    query: Optional[str],
    latitude: Optional[float],
    longitude: Optional[float]
) -> Tuple[str, float, float]:
    """Geocode a query, or pass explicit coordinates through"""
    if query:
        hit = geocoder.search(query)
        if hit is None:
            raise HTTPException(status_code=404, detail=f"Location not found: {query}")
        return hit["display_name"], hit["lat"], hit["lon"]

    if latitude is None or longitude is None:
        raise HTTPException(status_code=422, detail="Provide either a place name or latitude and longitude")

    return f"{latitude:.4f}, {longitude:.4f}", latitude, longitude


def score_location(
    latitude: float,
    longitude: float,
    day: Date,
    include_composites: bool = True
) -> List[ConditionRecord]:
    """Fetch one day of weather and score it"""
    try:
        reading = weather_connector.get_daily(latitude, longitude, day)
    except OpenMeteoError as e:
        raise HTTPException(status_code=400, detail=e.reason)

    if reading is None:
        raise HTTPException(status_code=502, detail="Weather service unavailable")

    return likelihood_scorer.build_conditions(reading, include_composites=include_composites)


# API Endpoints

@app.get("/")
def root():
    """API root endpoint"""
    return {
        "message": "Weather Likelihood API",
        "version": "1.0.0",
        "endpoints": {
            "health": "/health",
            "geocode": "/api/v1/geocode",
            "likelihood": "/api/v1/likelihood/location",
            "comparison": "/api/v1/likelihood/compare",
            "export": "/api/v1/likelihood/export",
            "forecast": "/api/v1/forecast"
        }
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "services": {
            "nominatim_api": "operational",
            "open_meteo_api": "operational"
        }
    }


@app.get("/api/v1/geocode")
def geocode(q: str = Query(..., min_length=1)):
    """Resolve a place name to coordinates"""
    hit = geocoder.search(q)
    if hit is None:
        raise HTTPException(status_code=404, detail=f"Location not found: {q}")
    return hit


@app.post("/api/v1/likelihood/location", response_model=LikelihoodResponse)
def assess_location(location: LocationInput):
    """
    Score weather condition likelihoods for a location and date

    Returns every condition record plus the dominant condition, alerts and
    summary statistics.
    """
    try:
        day = location.date or Date.today()
        name, lat, lon = resolve_location(location.query, location.latitude, location.longitude)

        conditions = score_location(lat, lon, day)
        dominant = likelihood_scorer.dominant_condition(conditions)

        return LikelihoodResponse(
            location=name,
            latitude=lat,
            longitude=lon,
            date=day,
            historical=weather_connector.is_historical(day),
            conditions=[c.to_dict() for c in conditions],
            dominant_condition=dominant.to_dict() if dominant else None,
            alerts=likelihood_scorer.build_alerts(conditions, name),
            summary=likelihood_scorer.summarize(conditions),
            timestamp=datetime.now()
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Error assessing location")
        raise HTTPException(status_code=500, detail=f"Error assessing location: {str(e)}")


@app.post("/api/v1/likelihood/compare", response_model=ComparisonResponse)
def compare_locations(comparison: ComparisonInput):
    """
    Compare the primary conditions of several locations

    The first location is the baseline; deltas are reported for the others.
    """
    try:
        day = comparison.date or Date.today()

        scored = []
        for query in comparison.locations:
            name, lat, lon = resolve_location(query, None, None)
            scored.append((name, score_location(lat, lon, day, include_composites=False)))

        primary_name, primary_conditions = scored[0]

        return ComparisonResponse(
            date=day,
            primary={
                "location": primary_name,
                "conditions": [c.to_dict() for c in primary_conditions]
            },
            comparisons=likelihood_scorer.compare(primary_conditions, scored[1:]),
            timestamp=datetime.now()
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Error comparing locations")
        raise HTTPException(status_code=500, detail=f"Error comparing locations: {str(e)}")


@app.get("/api/v1/likelihood/export")
def export_likelihood(
    format: str = Query("csv", pattern="^(csv|json)$"),
    query: Optional[str] = Query(None, min_length=1),
    latitude: Optional[float] = Query(None, ge=-90, le=90),
    longitude: Optional[float] = Query(None, ge=-180, le=180),
    date: Optional[Date] = Query(None)
):
    """Download condition likelihoods as CSV or JSON"""
    if query is None and (latitude is None or longitude is None):
        raise HTTPException(status_code=400, detail="Must provide either query or lat/lon")

    try:
        day = date or Date.today()
        name, lat, lon = resolve_location(query, latitude, longitude)
        conditions = score_location(lat, lon, day)

        if format == "json":
            content = export.to_json(conditions, name, day)
            media_type = "application/json"
        else:
            content = export.to_csv(conditions, name, day)
            media_type = "text/csv; charset=utf-8"

        return Response(
            content=content,
            media_type=media_type,
            headers={
                "Content-Disposition": f'attachment; filename="weather-likelihood-data.{format}"'
            }
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Error exporting likelihoods")
        raise HTTPException(status_code=500, detail=f"Error exporting likelihoods: {str(e)}")


@app.get("/api/v1/forecast")
def get_forecast(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    days: int = Query(7, ge=1, le=16)
):
    """Get the scored daily forecast for a location"""
    try:
        df = weather_connector.get_forecast(latitude, longitude, days)
    except OpenMeteoError as e:
        raise HTTPException(status_code=400, detail=e.reason)

    if df.empty:
        return {"count": 0, "days": []}

    try:
        df = likelihood_scorer.score_forecast(df)
        df["date"] = df["date"].dt.strftime("%Y-%m-%d")
        # JSON has no NaN
        df = df.astype(object).where(df.notna(), None)

        return {
            "count": len(df),
            "days": df.to_dict(orient="records")
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
