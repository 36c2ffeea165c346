"""
대출 신청 라우트

대출 신청, 상태별 목록, 승인/거절 API
"""

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.storage.pinjaman_store import InvalidStatusTransitionError, LoanApplicationStore
from core.types import LoanApplicationStatus
from web.dependencies import get_db, get_db_write
from web.models.requests import PengajuanCreateRequest, PengajuanStatusRequest

router = APIRouter(prefix="/api/pinjaman", tags=["Pinjaman"])


@router.get("")
async def list_pengajuan(
    status: LoanApplicationStatus | None = Query(default=None, description="상태 필터"),
    db: SQLiteAdapter = Depends(get_db),
):
    """대출 신청 목록 (최신순)"""
    store = LoanApplicationStore(db)
    return [p.to_dict() for p in await store.list_by_status(status)]


@router.post("", status_code=201)
async def submit_pengajuan(
    request: PengajuanCreateRequest,
    db: SQLiteAdapter = Depends(get_db_write),
):
    """대출 신청 (승인 대기 상태로 등록)"""
    store = LoanApplicationStore(db)
    pengajuan = await store.submit(
        no_anggota=request.no_anggota,
        nama_anggota=request.nama_anggota,
        jenis_pinjaman=request.jenis_pinjaman,
        jumlah=request.jumlah,
        jangka_waktu=request.jangka_waktu,
        keperluan=request.keperluan,
    )
    return pengajuan.to_dict()


@router.put("/{pengajuan_id}/status")
async def update_pengajuan_status(
    request: PengajuanStatusRequest,
    pengajuan_id: str = Path(..., description="신청 ID"),
    db: SQLiteAdapter = Depends(get_db_write),
):
    """대출 신청 승인/거절"""
    store = LoanApplicationStore(db)

    try:
        pengajuan = await store.update_status(
            pengajuan_id,
            LoanApplicationStatus(request.status),
            diputuskan_oleh=request.diputuskan_oleh,
        )
    except InvalidStatusTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))

    if pengajuan is None:
        raise HTTPException(status_code=404, detail=f"Loan application not found: {pengajuan_id}")
    return pengajuan.to_dict()
