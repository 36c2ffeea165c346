"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    AnggotaCreateRequest,
    AnggotaUpdateRequest,
    BatchPostRequest,
    ConfigUpdateRequest,
    CorrectionRequest,
    MutasiRequest,
    PengajuanCreateRequest,
    PengajuanStatusRequest,
    PengumumanCreateRequest,
    PengumumanUpdateRequest,
    TransactionEntryRequest,
)
from web.models.responses import (
    BatchErrorResponse,
    BatchResultResponse,
    ConfigResponse,
    CorrectionResponse,
    DeleteReportResponse,
    HealthResponse,
    PeriodListResponse,
    RekapResponse,
    SyncResponse,
)

__all__ = [
    # Requests
    "AnggotaCreateRequest",
    "AnggotaUpdateRequest",
    "BatchPostRequest",
    "ConfigUpdateRequest",
    "CorrectionRequest",
    "MutasiRequest",
    "PengajuanCreateRequest",
    "PengajuanStatusRequest",
    "PengumumanCreateRequest",
    "PengumumanUpdateRequest",
    "TransactionEntryRequest",
    # Responses
    "BatchErrorResponse",
    "BatchResultResponse",
    "ConfigResponse",
    "CorrectionResponse",
    "DeleteReportResponse",
    "HealthResponse",
    "PeriodListResponse",
    "RekapResponse",
    "SyncResponse",
]
