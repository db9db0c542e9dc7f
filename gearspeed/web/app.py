from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from gearspeed.calculator import calculator
from gearspeed.models import GEAR_SIZES, InvalidGear, SortKey
from gearspeed.utils import logger
from gearspeed.views import (compute_statistics, find_perfect_ratios,
                             optimization_summary)

from .routes import ALL_COMBINATIONS, build_context, router

app = FastAPI(title="GearSpeed Dashboard")

# Get the current directory path
current_dir = Path(__file__).parent

# Mount static files and templates with error handling
static_dir = current_dir / "static"
templates_dir = current_dir / "templates"

if static_dir.exists():
    app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

if templates_dir.exists():
    templates = Jinja2Templates(directory=str(templates_dir))
else:
    templates = None

# Include API routes
app.include_router(router)

SECTIONS = [
    ("combinations", "All Combinations"),
    ("optimization", "Optimization"),
    ("statistics", "Statistics"),
    ("perfect-ratios", "Perfect Ratios"),
    ("calculator", "Calculator"),
]


@app.get("/")
async def dashboard(request: Request, rpm: str = "all",
                    sort: SortKey = SortKey.OUTPUT, page: int = 1,
                    action: Optional[str] = None,
                    calc_rpm: Optional[str] = None,
                    calc_driving: Optional[str] = None,
                    calc_driven: Optional[str] = None):
    """Dashboard route with fallback for missing templates"""
    context = build_context(rpm, sort, page)
    if action == "prev":
        context = context.prev_page()
    elif action == "next":
        context = context.next_page()

    view = {
        "table": context.table(),
        "optimization": optimization_summary(ALL_COMBINATIONS),
        "statistics": compute_statistics(ALL_COMBINATIONS),
        "perfect": find_perfect_ratios(ALL_COMBINATIONS),
    }
    try:
        view["calculator"] = calculator.calculate(calc_rpm, calc_driving, calc_driven)
    except InvalidGear as e:
        # Keep the rest of the dashboard usable
        view["calculator"] = {"error": str(e)}

    if not templates:
        # Return JSON response if templates are not available
        return JSONResponse({
            "message": "GearSpeed Dashboard",
            **view,
            "note": "Web UI templates not found, showing JSON response"
        })

    return templates.TemplateResponse(request, "dashboard.html", {
        "sections": SECTIONS,
        "gear_sizes": GEAR_SIZES,
        "rpm_options": sorted({combo.input_rpm for combo in ALL_COMBINATIONS}),
        **view,
    })


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "GearSpeed Dashboard"}


# Error handlers
@app.exception_handler(InvalidGear)
async def invalid_gear_handler(request: Request, exc: InvalidGear):
    logger.warning(f"Rejected gear setup on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid gear", "detail": str(exc)}
    )


@app.exception_handler(400)
async def bad_request_handler(request: Request, exc):
    return JSONResponse(
        status_code=400,
        content={"error": "Bad request", "detail": exc.detail}
    )


@app.exception_handler(404)
async def not_found_handler(request: Request, exc):
    return JSONResponse(
        status_code=404,
        content={"error": "Not found", "path": str(request.url.path)}
    )


@app.exception_handler(500)
async def server_error_handler(request: Request, exc):
    logger.error(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "detail": str(exc)}
    )
