import logging

from fastapi import APIRouter, Depends, HTTPException

from rewards.deps import IdFactory, get_id_factory, get_parse_policy, get_store
from rewards.schemas import ReceiptIn
from rewards.scoring import ParsePolicy, score_receipt
from rewards.store import ScoreStore

logger = logging.getLogger("rewards")
router = APIRouter()


@router.post("/receipts/process")
def process_receipt(
    data: ReceiptIn,
    store: ScoreStore = Depends(get_store),
    new_id: IdFactory = Depends(get_id_factory),
    policy: ParsePolicy = Depends(get_parse_policy),
):
    points = score_receipt(data, policy)

    # The id only leaves this handler once the points are stored.
    receipt_id = new_id()
    store.put(receipt_id, points)

    logger.info(
        "Receipt processed",
        extra={"extra_data": {"receipt_id": receipt_id, "points": points, "items_count": len(data.items)}},
    )
    return {"id": receipt_id}


@router.get("/receipts/{receipt_id}/points")
def get_receipt_points(receipt_id: str, store: ScoreStore = Depends(get_store)):
    points = store.get(receipt_id)
    if points is None:
        raise HTTPException(status_code=404, detail="Receipt not found")
    return {"points": points}
