import logging

from fastapi import APIRouter
from fastapi.exceptions import HTTPException
from pydantic import BaseModel

from hasher.app.utils.hashing import compute_text_digest

logger = logging.getLogger("hasher.api")

router = APIRouter(tags=["Digest"])


class HashRequest(BaseModel):
    text: str = ""


class HashResponse(BaseModel):
    digest: str


@router.post(
    "/hash",
    summary="Compute the SHA-256 digest of a text",
    response_model=HashResponse,
    responses={
        400: {"description": "Empty text or invalid JSON"},
        405: {"description": "Method not allowed"},
    },
)
async def hash_text(payload: HashRequest) -> HashResponse:
    if payload.text == "":
        raise HTTPException(status_code=400, detail="Text field is required")

    digest = compute_text_digest(payload.text)
    logger.debug("digest_computed", extra={"digest": digest})
    return HashResponse(digest=digest)
