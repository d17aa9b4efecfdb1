"""
Song routes - CRUD endpoints and lyrics pagination under /v1.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from songs.config import settings
from songs.database import get_db
from songs.dependencies.pagination import get_page_request
from songs.errors import RESP_INVALID_LYRICS_QUERY, RESP_SONG_NOT_FOUND
from songs.middleware.request_id import get_request_id
from songs.schemas.errors import ErrorResponse, ValidationErrorResponse
from songs.schemas.pagination import PageResponse
from songs.schemas.song import SongLyrics, SongRequest, SongResponse
from songs.services import song_service
from songs.utils.pagination import PageRequest, PageResult
from songs.utils.uuid_utils import validate_uuid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["Songs"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    422: {"model": ValidationErrorResponse},
    500: {"model": ErrorResponse},
}


def _page_response(
    request: Request, result: PageResult, default_per_page: int
) -> JSONResponse:
    """Render the pagination envelope with its Link header."""
    link_header = result.build_link_header(str(request.url), default_per_page)
    return JSONResponse(content=result.to_dict(), headers={"Link": link_header})


@router.get(
    "/",
    response_model=PageResponse[List[SongResponse]],
    responses={500: {"model": ErrorResponse}},
)
async def list_songs(
    request: Request,
    page_request: PageRequest = Depends(get_page_request),
    group: Optional[str] = None,
    song: Optional[str] = None,
    text: Optional[str] = Query(None, description="Substring of the lyrics"),
    release_date: Optional[str] = Query(None, alias="releaseDate"),
    link: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """
    List songs with pagination and optional filters.

    Pagination links for first, prev, next and last pages are returned in
    the Link header and keep the active filters.
    """
    request_id = get_request_id(request)
    logger.debug("[%s] List songs started", request_id)

    filters = song_service.build_song_filters(group, song, text, release_date, link)
    result = song_service.list_songs(
        db, page_request, filters, count_total=settings.PAGINATION_COUNT_TOTAL
    )
    result.items = [
        SongResponse.model_validate(item).model_dump(mode="json")
        for item in result.items
    ]

    response = _page_response(request, result, settings.PAGINATION_DEFAULT_PER_PAGE)
    logger.info("[%s] Paginated songs retrieved successfully", request_id)
    return response


@router.get(
    "/info",
    response_model=PageResponse[SongLyrics],
    responses=ERROR_RESPONSES,
)
async def get_song_lyrics(
    request: Request,
    group: str = "",
    song: str = "",
    page_request: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
):
    """
    Get one page of verses for a song identified by group and song name.

    The number of verses per page is fixed by configuration.
    """
    request_id = get_request_id(request)
    logger.debug("[%s] Song lyrics started", request_id)

    if not group or not song:
        logger.debug("[%s] Invalid query parameters: group or song is empty", request_id)
        raise HTTPException(status_code=400, detail=RESP_INVALID_LYRICS_QUERY)

    verses_request = PageRequest(
        page=page_request.page, per_page=settings.LYRICS_VERSES_PER_PAGE
    )
    result = song_service.get_song_lyrics(db, group, song, verses_request)
    if result is None:
        logger.debug("[%s] Song not found", request_id)
        raise HTTPException(status_code=404, detail=RESP_SONG_NOT_FOUND)

    result.items = result.items.model_dump(mode="json")

    response = _page_response(request, result, settings.LYRICS_VERSES_PER_PAGE)
    logger.info("[%s] Song lyrics retrieved successfully", request_id)
    return response


@router.get("/{song_id}", response_model=SongResponse, responses=ERROR_RESPONSES)
async def read_song(song_id: str, request: Request, db: Session = Depends(get_db)):
    song_uuid = validate_uuid(song_id)
    logger.debug("[%s] Read song %s", get_request_id(request), song_uuid)

    song = song_service.get_song(db, song_uuid)
    if song is None:
        raise HTTPException(status_code=404, detail=RESP_SONG_NOT_FOUND)

    return SongResponse.model_validate(song)


@router.post(
    "/", status_code=201, response_model=SongResponse, responses=ERROR_RESPONSES
)
async def create_song(
    payload: SongRequest, request: Request, db: Session = Depends(get_db)
):
    """Create a song. Every field of the body is required."""
    song = song_service.create_song(db, payload)
    logger.info("[%s] New song created: %s", get_request_id(request), song.id)
    return SongResponse.model_validate(song)


@router.put("/{song_id}", response_model=SongResponse, responses=ERROR_RESPONSES)
async def update_song(
    song_id: str,
    payload: SongRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """Replace every field of an existing song."""
    song_uuid = validate_uuid(song_id)
    request_id = get_request_id(request)

    song = song_service.update_song(db, song_uuid, payload)
    if song is None:
        logger.debug("[%s] No rows affected; song not found", request_id)
        raise HTTPException(status_code=404, detail=RESP_SONG_NOT_FOUND)

    logger.info("[%s] Song updated successfully: %s", request_id, song_uuid)
    return SongResponse.model_validate(song)


@router.delete("/{song_id}", status_code=204, responses=ERROR_RESPONSES)
async def delete_song(song_id: str, request: Request, db: Session = Depends(get_db)):
    song_uuid = validate_uuid(song_id)
    request_id = get_request_id(request)

    if not song_service.delete_song(db, song_uuid):
        logger.debug("[%s] No rows affected; song not found for deletion", request_id)
        raise HTTPException(status_code=404, detail=RESP_SONG_NOT_FOUND)

    logger.info("[%s] Song deleted successfully: %s", request_id, song_uuid)
    return Response(status_code=204)
