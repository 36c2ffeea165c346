"""
거래 로그 라우트

거래 로그 조회, 관리자별 정산, 누락 로그 동기화 API
"""

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger import TransactionLogStore, total_setoran
from web.dependencies import get_db, get_db_write
from web.models.responses import PeriodListResponse, RekapResponse, SyncResponse
from web.services.keuangan_service import KeuanganService

router = APIRouter(prefix="/api/transaksi-log", tags=["TransaksiLog"])


@router.get("")
async def list_logs(
    no_anggota: str | None = Query(default=None, description="회원번호 필터"),
    periode: str | None = Query(default=None, description="기간 필터 (YYYY-MM)"),
    limit: int | None = Query(default=None, ge=1, le=5000),
    db: SQLiteAdapter = Depends(get_db),
):
    """거래 로그 목록 (최신순)"""
    store = TransactionLogStore(db)
    logs = await store.list_logs(
        no_anggota=no_anggota.upper() if no_anggota else None,
        periode=periode,
        limit=limit,
    )
    return [log.to_dict() for log in logs]


@router.get("/periode", response_model=PeriodListResponse)
async def list_log_periods(
    db: SQLiteAdapter = Depends(get_db),
) -> PeriodListResponse:
    """로그가 있는 기간 목록 (최신순)"""
    store = TransactionLogStore(db)
    return PeriodListResponse(periods=await store.list_periods())


@router.get("/rekap", response_model=RekapResponse)
async def get_rekap_setoran(
    admin_nama: str = Query(..., description="관리자 이름"),
    periode: str = Query(..., description="기간 (YYYY-MM)"),
    db: SQLiteAdapter = Depends(get_db),
) -> RekapResponse:
    """관리자별 납입 정산"""
    store = TransactionLogStore(db)
    logs = await store.list_by_admin_period(admin_nama, periode)
    return RekapResponse(
        admin_nama=admin_nama,
        periode=periode,
        total_setoran=str(total_setoran(logs)),
        logs=[log.to_dict() for log in logs],
    )


@router.post("/sync", response_model=SyncResponse)
async def synchronize_missing_logs(
    db: SQLiteAdapter = Depends(get_db_write),
) -> SyncResponse:
    """이력은 있지만 로그가 없는 항목의 로그 생성"""
    service = KeuanganService(db)
    result = await service.synchronize_logs()
    return SyncResponse(
        created=result.created,
        zero_movement=[list(key) for key in result.zero_movement],
    )


@router.get("/{log_id}")
async def get_log(
    log_id: str = Path(..., description="로그 ID"),
    db: SQLiteAdapter = Depends(get_db),
):
    """거래 로그 단건 조회"""
    store = TransactionLogStore(db)
    log = await store.get_log(log_id)
    if log is None:
        raise HTTPException(status_code=404, detail=f"Transaction log not found: {log_id}")
    return log.to_dict()
