"""
회원 라우트

회원 명부 CRUD API
"""

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.storage.anggota_store import Anggota, MemberDirectory, MemberExistsError
from core.types import MemberStatus
from web.dependencies import get_db, get_db_write
from web.models.requests import AnggotaCreateRequest, AnggotaUpdateRequest

router = APIRouter(prefix="/api/anggota", tags=["Anggota"])


@router.get("")
async def list_anggota(
    status: MemberStatus | None = Query(default=None, description="회원 상태 필터"),
    db: SQLiteAdapter = Depends(get_db),
):
    """회원 목록"""
    directory = MemberDirectory(db)
    return [a.to_dict() for a in await directory.list_all(status)]


@router.get("/{no_anggota}")
async def get_anggota(
    no_anggota: str = Path(..., description="회원번호"),
    db: SQLiteAdapter = Depends(get_db),
):
    """회원 조회"""
    directory = MemberDirectory(db)
    anggota = await directory.get_by_no(no_anggota)
    if anggota is None:
        raise HTTPException(status_code=404, detail=f"Member not found: {no_anggota}")
    return anggota.to_dict()


@router.post("", status_code=201)
async def create_anggota(
    request: AnggotaCreateRequest,
    db: SQLiteAdapter = Depends(get_db_write),
):
    """회원 등록"""
    directory = MemberDirectory(db)
    data = request.model_dump()
    data["status"] = MemberStatus(data["status"])

    try:
        anggota = await directory.add(Anggota(**data))
    except MemberExistsError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return anggota.to_dict()


@router.put("/{no_anggota}")
async def update_anggota(
    request: AnggotaUpdateRequest,
    no_anggota: str = Path(..., description="회원번호"),
    db: SQLiteAdapter = Depends(get_db_write),
):
    """회원 정보 수정"""
    directory = MemberDirectory(db)
    anggota = await directory.update(no_anggota, request.model_dump(exclude_none=True))
    if anggota is None:
        raise HTTPException(status_code=404, detail=f"Member not found: {no_anggota}")
    return anggota.to_dict()


@router.delete("/{no_anggota}")
async def delete_anggota(
    no_anggota: str = Path(..., description="회원번호"),
    db: SQLiteAdapter = Depends(get_db_write),
) -> dict[str, str]:
    """회원 삭제 (장부 데이터는 유지)"""
    directory = MemberDirectory(db)
    if not await directory.delete(no_anggota):
        raise HTTPException(status_code=404, detail=f"Member not found: {no_anggota}")
    return {"message": f"Member deleted: {no_anggota.upper()}"}
