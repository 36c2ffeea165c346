"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화.
장부/로그 본문은 평탄화된 dict 그대로 반환한다.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    mode: str = Field(..., description="운영 모드 (production/development)")
    koperasi: str = Field(..., description="koperasi 이름")
    timestamp: datetime = Field(..., description="응답 시간 (UTC)")


class BatchErrorResponse(BaseModel):
    """배치 실패 항목"""

    no_anggota: str = Field(..., description="회원번호")
    error: str = Field(..., description="오류 메시지")


class BatchResultResponse(BaseModel):
    """월간 배치 게시 결과"""

    periode: str = Field(..., description="대상 기간")
    success_count: int = Field(..., description="성공 회원 수")
    error_count: int = Field(..., description="실패 회원 수")
    errors: list[BatchErrorResponse] = Field(default_factory=list, description="실패 목록")
    log_failures: int = Field(default=0, description="로그 기록 실패 수 (게시는 유지)")


class CorrectionResponse(BaseModel):
    """거래 수정 결과"""

    log_id: str = Field(..., description="수정된 로그 ID")
    recomputed_periods: list[str] = Field(..., description="다시 계산된 기간 (변경 없으면 빈 목록)")


class PeriodListResponse(BaseModel):
    """기간 목록"""

    periods: list[str] = Field(..., description="기간 목록 (최신순)")


class DeleteReportResponse(BaseModel):
    """월간 보고서 삭제 결과"""

    periode: str = Field(..., description="삭제된 기간")
    members: list[str] = Field(..., description="영향받은 회원")
    deleted_logs: int = Field(..., description="삭제된 로그 수")


class RekapResponse(BaseModel):
    """관리자별 정산"""

    admin_nama: str = Field(..., description="관리자 이름")
    periode: str = Field(..., description="기간")
    total_setoran: str = Field(..., description="총 납입액")
    logs: list[dict[str, Any]] = Field(default_factory=list, description="로그 목록")


class SyncResponse(BaseModel):
    """누락 로그 동기화 결과"""

    created: int = Field(..., description="생성된 로그 수")
    zero_movement: list[list[str]] = Field(
        default_factory=list, description="거래 금액이 모두 0인 이력 [회원번호, 기간]"
    )


class ConfigResponse(BaseModel):
    """설정 응답"""

    key: str = Field(..., description="설정 키")
    value: dict[str, Any] = Field(..., description="설정 값")
    version: int = Field(..., description="버전 (저장 전이면 0)")
