"""
Keuangan 라우트

월간 거래 게시, 과거 거래 수정, 월간 보고서 API

주의: /periode, /laporan/{periode} 경로는 /{no_anggota}보다 먼저 등록해야 한다.
"""

import aiosqlite
from fastapi import APIRouter, Depends, HTTPException, Path

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger import (
    AmountValidationError,
    HistoryNotFoundError,
    LogNotFoundError,
    MonthlyReportService,
    PeriodFormatError,
)
from web.dependencies import get_db, get_db_write
from web.models.requests import BatchPostRequest, CorrectionRequest
from web.models.responses import (
    BatchErrorResponse,
    BatchResultResponse,
    CorrectionResponse,
    DeleteReportResponse,
    PeriodListResponse,
)
from web.services.keuangan_service import KeuanganService

router = APIRouter(prefix="/api/keuangan", tags=["Keuangan"])


@router.post("/transaksi", response_model=BatchResultResponse)
async def post_monthly_batch(
    request: BatchPostRequest,
    db: SQLiteAdapter = Depends(get_db_write),
) -> BatchResultResponse:
    """월간 거래 배치 게시

    회원별로 독립 처리. 일부 실패해도 나머지는 게시된다.
    """
    service = KeuanganService(db)
    entries = [e.to_entry(request.admin_nama) for e in request.entries]

    try:
        outcome = await service.post_batch(entries, request.periode)
    except PeriodFormatError as e:
        raise HTTPException(status_code=422, detail=str(e))

    result = outcome.result
    return BatchResultResponse(
        periode=request.periode,
        success_count=result.success_count,
        error_count=result.error_count,
        errors=[
            BatchErrorResponse(no_anggota=err.no_anggota, error=err.error)
            for err in result.errors
        ],
        log_failures=outcome.log_failures,
    )


@router.post("/koreksi/{log_id}", response_model=CorrectionResponse)
async def correct_transaction(
    request: CorrectionRequest,
    log_id: str = Path(..., description="수정할 거래 로그 ID"),
    db: SQLiteAdapter = Depends(get_db_write),
) -> CorrectionResponse:
    """과거 거래 수정 (이후 기간까지 재계산)"""
    service = KeuanganService(db)

    try:
        periods = await service.correct(log_id, request.to_mutasi(), request.editor)
    except AmountValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except (LogNotFoundError, HistoryNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except aiosqlite.OperationalError as e:
        raise HTTPException(status_code=409, detail=f"Conflict, retry later: {e}")

    return CorrectionResponse(log_id=log_id, recomputed_periods=periods)


@router.get("")
async def list_current_ledgers(
    db: SQLiteAdapter = Depends(get_db),
):
    """전체 회원의 현재 장부 (회원번호 순)"""
    service = MonthlyReportService(db)
    return [report.to_dict() for report in await service.list_current()]


@router.get("/periode", response_model=PeriodListResponse)
async def list_posted_periods(
    db: SQLiteAdapter = Depends(get_db),
) -> PeriodListResponse:
    """게시된 기간 목록 (최신순)"""
    service = MonthlyReportService(db)
    return PeriodListResponse(periods=await service.list_posted_periods())


@router.post("/periode/rebuild", response_model=PeriodListResponse)
async def rebuild_posted_periods(
    db: SQLiteAdapter = Depends(get_db_write),
) -> PeriodListResponse:
    """이력에서 기간 레지스트리 재구성"""
    service = MonthlyReportService(db)
    return PeriodListResponse(periods=await service.rebuild_posted_periods())


@router.delete("/laporan/{periode}", response_model=DeleteReportResponse)
async def delete_monthly_report(
    periode: str = Path(..., description="삭제할 기간 (YYYY-MM)"),
    db: SQLiteAdapter = Depends(get_db_write),
) -> DeleteReportResponse:
    """월간 보고서 삭제 (이후 기간 재계산, 로그 삭제)"""
    service = KeuanganService(db)

    try:
        result = await service.delete_monthly_report(periode)
    except PeriodFormatError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except aiosqlite.OperationalError as e:
        raise HTTPException(status_code=409, detail=f"Conflict, retry later: {e}")

    return DeleteReportResponse(
        periode=result.periode,
        members=result.members,
        deleted_logs=result.deleted_logs,
    )


@router.get("/{no_anggota}")
async def get_current_ledger(
    no_anggota: str = Path(..., description="회원번호"),
    db: SQLiteAdapter = Depends(get_db),
):
    """회원 현재 장부"""
    service = MonthlyReportService(db)
    report = await service.get_current(no_anggota.upper())
    if report is None:
        raise HTTPException(status_code=404, detail=f"Ledger not found: {no_anggota}")
    return report.to_dict()


@router.get("/{no_anggota}/laporan", response_model=PeriodListResponse)
async def list_member_report_periods(
    no_anggota: str = Path(..., description="회원번호"),
    db: SQLiteAdapter = Depends(get_db),
) -> PeriodListResponse:
    """회원의 월간 보고서 기간 목록 (최신순)"""
    service = MonthlyReportService(db)
    periods = await service.get_available_report_periods(no_anggota.upper())
    return PeriodListResponse(periods=periods)


@router.get("/{no_anggota}/laporan/{periode}")
async def get_monthly_report(
    no_anggota: str = Path(..., description="회원번호"),
    periode: str = Path(..., description="기간 (YYYY-MM)"),
    db: SQLiteAdapter = Depends(get_db),
):
    """회원의 월간 보고서"""
    service = MonthlyReportService(db)

    try:
        report = await service.get_monthly_report(no_anggota.upper(), periode)
    except PeriodFormatError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if report is None:
        raise HTTPException(
            status_code=404,
            detail=f"Report not found: {no_anggota} / {periode}",
        )
    return report.to_dict()

