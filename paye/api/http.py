import logging
import math
from typing import Any

from fastapi import FastAPI, HTTPException, Query, Request
from pydantic import BaseModel, ConfigDict, Field, field_validator

from paye.config import Settings, get_settings
from paye.core.brackets import NTA_2025_BRACKETS
from paye.core.calculator import calculate_tax, deductions_for
from paye.core.explain import explain_breakdown, summarize
from paye.core.models import Period
from paye.core.period import convert_entered_value, for_display, project_result, to_annual
from paye.counter import CounterStore, NullCounterStore
from paye.lifespan import build_application_lifespan
from paye.wizard import parse_amount

logger = logging.getLogger("paye")


async def _announce_configuration(app: FastAPI) -> None:
    settings = app.state.settings
    logger.info(
        "PAYE estimator ready; version=%s sha=%s redis_configured=%s",
        settings.build_version,
        settings.build_sha,
        settings.redis_url is not None,
    )


app = FastAPI(
    title="PAYE Estimator",
    description="Personal income tax estimate under the progressive NTA bracket table, in annual or monthly terms.",
    lifespan=build_application_lifespan("api", startup_hook=_announce_configuration),
)


class CalculateRequest(BaseModel):
    income: float = Field(..., ge=0, description="Gross income for the chosen period")
    period: Period | None = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("income", mode="before")
    @classmethod
    def _parse_income(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_amount(value)
        return value

    @field_validator("income")
    @classmethod
    def _require_finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("Income must be a finite number")
        return value


def _settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def _counter_store(request: Request) -> CounterStore:
    return getattr(request.app.state, "counter_store", None) or NullCounterStore()


def _finite(value: float, name: str) -> float:
    if not math.isfinite(value):
        raise HTTPException(status_code=422, detail=f"{name} must be a finite number")
    return value


def _estimate(settings: Settings, income: float, period: Period | None) -> dict[str, Any]:
    view: Period = period or settings.default_period
    result = calculate_tax(
        _finite(to_annual(income, view), "income"),
        zero_income_deductions=settings.zero_income_deductions,
    )
    return {
        "period": view,
        "annual": result.model_dump(),
        "display": project_result(result, view).model_dump(),
        "summary": summarize(result, view),
        "explanation": [line.model_dump() for line in explain_breakdown(result, view)],
    }


@app.get("/health")
def health(request: Request):
    settings = _settings(request)
    store = _counter_store(request)
    return {
        "status": "ok",
        "build": {
            "version": settings.build_version,
            "sha": settings.build_sha,
        },
        "counter_backend": store.backend,
        "zero_income_deductions": settings.zero_income_deductions,
        "default_period": settings.default_period,
    }


@app.get("/tax/brackets")
def brackets():
    return {
        "brackets": [
            {
                "lower": bracket.lower,
                "upper": bracket.upper,
                "rate": bracket.rate,
                "label": bracket.label,
            }
            for bracket in NTA_2025_BRACKETS
        ]
    }


@app.get("/tax/deductions")
def deductions(request: Request, income: float = Query(..., ge=0), period: Period | None = None):
    settings = _settings(request)
    view: Period = period or settings.default_period
    annual = deductions_for(
        _finite(to_annual(income, view), "income"),
        zero_income_deductions=settings.zero_income_deductions,
    )
    payload = annual.model_dump()
    return {
        "period": view,
        "annual": {**payload, "total": annual.total},
        "display": {key: for_display(value, view) for key, value in {**payload, "total": annual.total}.items()},
    }


@app.get("/tax/estimate")
def estimate(request: Request, income: float = Query(..., ge=0), period: Period | None = None):
    return _estimate(_settings(request), income, period)


@app.post("/tax/calculate")
def calculate(request: Request, payload: CalculateRequest):
    return _estimate(_settings(request), payload.income, payload.period)


@app.get("/tax/convert")
def convert(
    value: float = Query(..., ge=0),
    from_period: Period = "annual",
    to_period: Period = "monthly",
):
    converted = _finite(convert_entered_value(_finite(value, "value"), from_period, to_period), "value")
    return {"value": converted, "period": to_period}


@app.get("/visits")
async def visit_count(request: Request):
    return {"count": await _counter_store(request).get_count()}


@app.post("/visits")
async def record_visit(request: Request):
    return {"count": await _counter_store(request).increment_count()}
