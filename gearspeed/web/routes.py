from typing import Optional, Union

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from gearspeed.calculator import calculator
from gearspeed.generator import generate_all_combinations
from gearspeed.models import SortKey
from gearspeed.views import (ViewContext, compute_statistics,
                             find_perfect_ratios, optimization_summary)

router = APIRouter(prefix="/api")

# Generated once; every view below only reads it
ALL_COMBINATIONS = generate_all_combinations()


class CalculatorInput(BaseModel):
    input_rpm: Optional[Union[float, str]] = None
    driving_gear: Optional[Union[float, str]] = None
    driven_gear: Optional[Union[float, str]] = None


def build_context(rpm="all", sort=SortKey.OUTPUT, page=1):
    """Table context for the requested selection"""
    try:
        context = ViewContext(ALL_COMBINATIONS).with_filter(rpm).with_sort(sort)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return context.go_to(page)


@router.get("/combinations")
async def get_combinations(rpm: str = "all", sort: SortKey = SortKey.OUTPUT,
                           page: int = 1):
    """Get one page of the filtered and sorted combination table"""
    return build_context(rpm, sort, page).table()


@router.get("/optimization")
async def get_optimization():
    """Get fastest, slowest and balanced setups"""
    return optimization_summary(ALL_COMBINATIONS)


@router.get("/statistics")
async def get_statistics():
    """Get output speed statistics and category distribution"""
    return compute_statistics(ALL_COMBINATIONS)


@router.get("/perfect-ratios")
async def get_perfect_ratios():
    """Get whole-number ratio setups"""
    return find_perfect_ratios(ALL_COMBINATIONS)


@router.get("/calculate")
async def calculate(input_rpm: Optional[str] = None,
                    driving_gear: Optional[str] = None,
                    driven_gear: Optional[str] = None):
    """Calculate a single gear setup; unparseable fields fall back to defaults"""
    return calculator.calculate(input_rpm, driving_gear, driven_gear)


@router.post("/calculate")
async def calculate_setup(setup: CalculatorInput):
    """Calculate a single gear setup from a JSON body"""
    return calculator.calculate(setup.input_rpm, setup.driving_gear,
                                setup.driven_gear)
