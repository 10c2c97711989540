"""Poster Routes."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.dependencies import get_poster_writer
from storefront.api.routes.record_queries import list_records, read_record
from storefront.core.errors import envelope
from storefront.infrastructure.database import get_db
from storefront.models.poster import Poster
from storefront.schemas.poster import PosterCreate, PosterRead, PosterUpdate
from storefront.services.commerce_writers import PosterWriter

router = APIRouter(prefix="/api/v1/posters", tags=["posters"])


@router.get("")
async def list_posters(db: AsyncSession = Depends(get_db)):
    data = await list_records(db, Poster, PosterRead)
    return envelope(True, "Posters retrieved successfully.", data)


@router.get("/{poster_id}")
async def get_poster(poster_id: UUID, db: AsyncSession = Depends(get_db)):
    data = await read_record(db, Poster, PosterRead, poster_id, "Poster")
    return envelope(True, "Poster retrieved successfully.", data)


@router.post("")
async def create_poster(body: PosterCreate, writer: PosterWriter = Depends(get_poster_writer)):
    data = await writer.create(body.model_dump())
    return envelope(True, "Poster created successfully.", data)


@router.put("/{poster_id}")
async def update_poster(
    poster_id: UUID, body: PosterUpdate, writer: PosterWriter = Depends(get_poster_writer),
):
    data = await writer.update(poster_id, body.changes())
    return envelope(True, "Poster updated successfully.", data)


@router.delete("/{poster_id}")
async def delete_poster(poster_id: UUID, writer: PosterWriter = Depends(get_poster_writer)):
    data = await writer.delete(poster_id)
    return envelope(True, "Poster deleted successfully.", data)
