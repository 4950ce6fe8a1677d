"""Chapter fetch endpoint."""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..core.exceptions import TRANSPORT_ERRORS, ExtractionError, InsufficientContent, InvalidUrl
from ..core.logging import get_logger
from ..services.extraction_service import ExtractionService

router = APIRouter()
logger = get_logger(__name__)


class FetchNovelRequest(BaseModel):
    url: Optional[str] = None
    current_title: Optional[str] = Field(default=None, alias="currentTitle")


def get_extraction_service() -> ExtractionService:
    return ExtractionService()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("/api/fetch-novel")
async def fetch_novel(
    request: FetchNovelRequest,
    service: ExtractionService = Depends(get_extraction_service),
):
    """Fetch one chapter page and return its prose and navigation."""
    if not request.url or not request.url.strip():
        return _error(400, "Missing url parameter")
    
    url = request.url.strip()
    try:
        result = await service.fetch_chapter(url, current_title=request.current_title)
    except InvalidUrl as e:
        return _error(400, e.message)
    except InsufficientContent as e:
        return _error(422, e.message)
    except TRANSPORT_ERRORS as e:
        return _error(502, f"Failed to fetch chapter: {e.message}")
    except ExtractionError as e:
        return _error(500, e.message)
    except Exception as e:
        logger.error("Unexpected chapter fetch failure", target=url, error=str(e))
        return _error(500, "Failed to fetch chapter content, please check the URL")
    
    return result.to_response()
