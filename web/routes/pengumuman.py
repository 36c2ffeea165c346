"""
공지사항 라우트

공지사항 CRUD API
"""

from fastapi import APIRouter, Depends, HTTPException, Path

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.storage.pengumuman_store import AnnouncementStore
from web.dependencies import get_db, get_db_write
from web.models.requests import PengumumanCreateRequest, PengumumanUpdateRequest

router = APIRouter(prefix="/api/pengumuman", tags=["Pengumuman"])


@router.get("")
async def list_pengumuman(
    db: SQLiteAdapter = Depends(get_db),
):
    """공지사항 목록 (최신순)"""
    store = AnnouncementStore(db)
    return [p.to_dict() for p in await store.list_all()]


@router.get("/{pengumuman_id}")
async def get_pengumuman(
    pengumuman_id: str = Path(..., description="공지사항 ID"),
    db: SQLiteAdapter = Depends(get_db),
):
    """공지사항 조회"""
    store = AnnouncementStore(db)
    pengumuman = await store.get(pengumuman_id)
    if pengumuman is None:
        raise HTTPException(status_code=404, detail=f"Announcement not found: {pengumuman_id}")
    return pengumuman.to_dict()


@router.post("", status_code=201)
async def create_pengumuman(
    request: PengumumanCreateRequest,
    db: SQLiteAdapter = Depends(get_db_write),
):
    """공지사항 등록"""
    store = AnnouncementStore(db)
    pengumuman = await store.add(
        judul=request.judul,
        isi=request.isi,
        tanggal=request.tanggal,
        penulis=request.penulis,
    )
    return pengumuman.to_dict()


@router.put("/{pengumuman_id}")
async def update_pengumuman(
    request: PengumumanUpdateRequest,
    pengumuman_id: str = Path(..., description="공지사항 ID"),
    db: SQLiteAdapter = Depends(get_db_write),
):
    """공지사항 수정"""
    store = AnnouncementStore(db)
    pengumuman = await store.update(pengumuman_id, request.model_dump(exclude_none=True))
    if pengumuman is None:
        raise HTTPException(status_code=404, detail=f"Announcement not found: {pengumuman_id}")
    return pengumuman.to_dict()


@router.delete("/{pengumuman_id}")
async def delete_pengumuman(
    pengumuman_id: str = Path(..., description="공지사항 ID"),
    db: SQLiteAdapter = Depends(get_db_write),
) -> dict[str, str]:
    """공지사항 삭제"""
    store = AnnouncementStore(db)
    if not await store.delete(pengumuman_id):
        raise HTTPException(status_code=404, detail=f"Announcement not found: {pengumuman_id}")
    return {"message": f"Announcement deleted: {pengumuman_id}"}
