from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..db import crud
from ..logging_config import get_logger
from .deps import get_db
from .schemas import ErrorOut, TransactionOut
from .serializers import serialize_transaction

logger = get_logger("portfolio.api.transactions")

router = APIRouter(prefix="/paystack", tags=["transactions"])


@router.get(
    "/transactions",
    response_model=List[TransactionOut],
    responses={500: {"model": ErrorOut}},
)
async def list_transactions(db=Depends(get_db)):
    """
    Every payment transaction with its order, newest first.
    """
    try:
        txs = await crud.list_transactions(db)
    except Exception as e:
        logger.exception("Failed to fetch transactions: %s", e)
        return JSONResponse(status_code=500, content={"error": "Failed to fetch transactions"})
    logger.info("Fetched %d transactions", len(txs))
    return [serialize_transaction(t) for t in txs]


@router.get(
    "/transactions/{reference}",
    response_model=TransactionOut,
    responses={404: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
async def get_transaction(reference: str, db=Depends(get_db)):
    """
    Look up a single transaction by its payment reference.
    """
    try:
        tx = await crud.get_transaction_by_reference(db, reference)
    except Exception as e:
        logger.exception("Failed to fetch transaction reference=%s: %s", reference, e)
        return JSONResponse(status_code=500, content={"error": "Failed to fetch transaction"})
    if tx is None:
        logger.warning("Transaction not found: reference=%s", reference)
        return JSONResponse(status_code=404, content={"error": "Transaction not found"})
    return serialize_transaction(tx)
