# iproas/routers/roas.py
# -----------------------------------------------------------------------------
# /roas/evaluate            : full IP-ROAS result bundle
# /roas/sensitivity/{kind}  : one sensitivity curve
# /roas/products/*          : CSV import / manual product entry
# /roas/context             : text snapshot for the chat assistant
# -----------------------------------------------------------------------------
from typing import List

from fastapi import APIRouter, File, HTTPException, UploadFile
from loguru import logger

from iproas.schemas.roas import (
    SENSITIVITY_CONFIGS,
    ClientParameters,
    ContextResponse,
    Product,
    ProductEntry,
    Results,
    SensitivityConfig,
    SensitivityKind,
    SensitivityRequest,
    SensitivityResponse,
    config_for,
)
from iproas.services.calculator import evaluate
from iproas.services.context import build_context
from iproas.services.csv_import import parse_products_csv
from iproas.services.sensitivity import sweep

router = APIRouter(prefix="/roas", tags=["roas"])


@router.post("/evaluate", response_model=Results)
async def evaluate_params(params: ClientParameters):
    return evaluate(params)


@router.get("/sensitivity", response_model=List[SensitivityConfig])
async def sensitivity_configs():
    return SENSITIVITY_CONFIGS


@router.post("/sensitivity/{kind}", response_model=SensitivityResponse)
async def sensitivity(kind: SensitivityKind, req: SensitivityRequest):
    return SensitivityResponse(
        kind=kind,
        config=config_for(kind),
        points=sweep(kind, req.params, req.point_count),
    )


@router.post("/products/csv", response_model=List[Product])
async def import_products_csv(file: UploadFile = File(...)):
    try:
        raw = await file.read()
        text = raw.decode("utf-8-sig", errors="replace")
    except Exception as e:
        logger.error(f"[csv] upload read failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return parse_products_csv(text)


@router.post("/products/entry", response_model=Product)
async def product_entry(entry: ProductEntry):
    return entry.to_product()


@router.post("/context", response_model=ContextResponse)
async def context(params: ClientParameters):
    return ContextResponse(context=build_context(params, evaluate(params)))
