import logging
from datetime import date
from typing import List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from calendar_solver import solve_report
from calendar_solver.dataio.loader import extract_var_id
from calendar_solver.csp.constraints import binary, unary
from calendar_solver.exceptions import ERROR_STATUS_CODES

logger = logging.getLogger("calendar_api")

app = FastAPI()


class ConstraintItem(BaseModel):
    # right は "#1" なら会議番号（二項制約）、それ以外は日付（単項制約）
    left: int = Field(ge=0)
    op: str
    right: str


class SolveRequest(BaseModel):
    meeting_count: int = Field(ge=0)
    range_start: date
    range_end: date
    constraints: List[ConstraintItem] = []
    algorithm: str = "backtrack"


def build_constraints(items: List[ConstraintItem]):
    constraints = []
    for item in items:
        right_var = extract_var_id(item.right)
        if right_var is not None:
            constraints.append(binary(item.left, item.op, right_var))
        else:
            constraints.append(unary(item.left, item.op, item.right))
    return constraints


@app.get("/api/health")
async def api_health():
    return {"status": "ok"}


@app.post("/api/solve")
async def api_solve(request: SolveRequest):
    """
    Solver API endpoint.
    Receives meeting count, date range and constraints, and returns the schedule report.
    """
    try:
        constraints = build_constraints(request.constraints)
        return solve_report(
            request.meeting_count,
            request.range_start,
            request.range_end,
            constraints,
            algorithm=request.algorithm,
        )
    except tuple(ERROR_STATUS_CODES) as e:
        raise HTTPException(status_code=ERROR_STATUS_CODES[type(e)], detail=str(e))
    except ValueError as e:
        # 未知の演算子・探索アルゴリズム名など
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Unexpected error while solving")
        raise HTTPException(status_code=500, detail=str(e))
