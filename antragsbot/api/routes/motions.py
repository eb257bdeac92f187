"""
Motion Lookup Routes

Read-only view of the Correlation Store.
"""

from fastapi import APIRouter, HTTPException, Request
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/{thread_id}")
async def get_motion_for_thread(thread_id: str, request: Request):
    """
    Canonical record id of the motion discussed in a thread.

    Examples:
    - GET /api/motions/1234567890
    """
    store = request.app.state.store
    record_id = await store.get_record_for_thread(thread_id)

    if record_id is None:
        raise HTTPException(
            status_code=404,
            detail={"success": False, "message": f"No motion for thread {thread_id}"},
        )

    return {"success": True, "thread_id": thread_id, "record_id": record_id}
