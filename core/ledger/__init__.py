"""
회원 장부 시스템

월간 거래 게시(재계산 엔진)와 과거 거래 수정(수정 엔진) 제공.

사용 예시:
```python
from core.ledger import MonthlyRecalculationEngine, CorrectionEngine

engine = MonthlyRecalculationEngine(db, members=MemberDirectory(db))
result = await engine.post_monthly_batch(entries, "2024-01")

corrector = CorrectionEngine(db)
periods = await corrector.correct_transaction(log_id, corrected, editor="Budi")
```
"""

from core.ledger.correction import CorrectionEngine
from core.ledger.errors import (
    AmountValidationError,
    HistoryNotFoundError,
    LedgerError,
    LogNotFoundError,
    MemberValidationError,
    PeriodFormatError,
)
from core.ledger.log_store import TransactionLogStore, total_setoran
from core.ledger.models import (
    BatchError,
    BatchResult,
    MonthlyReport,
    Mutasi,
    Saldo,
    TransactionEntry,
    TransactionLog,
)
from core.ledger.recalculation import MonthlyRecalculationEngine
from core.ledger.reconciliation import SyncResult, synchronize_missing_logs
from core.ledger.reports import DeleteReportResult, MonthlyReportService
from core.ledger.store import LedgerStore
from core.ledger.types import MUTASI_FIELDS, Rekening

__all__ = [
    # 엔진/서비스
    "MonthlyRecalculationEngine",
    "CorrectionEngine",
    "MonthlyReportService",
    "LedgerStore",
    "TransactionLogStore",
    "total_setoran",
    "synchronize_missing_logs",
    # 모델
    "Saldo",
    "Mutasi",
    "MonthlyReport",
    "TransactionEntry",
    "TransactionLog",
    "BatchResult",
    "BatchError",
    "SyncResult",
    "DeleteReportResult",
    # 예외
    "LedgerError",
    "AmountValidationError",
    "PeriodFormatError",
    "MemberValidationError",
    "LogNotFoundError",
    "HistoryNotFoundError",
    # 타입
    "Rekening",
    "MUTASI_FIELDS",
]
