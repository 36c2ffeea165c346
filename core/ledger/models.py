"""
장부 데이터 모델

- Saldo: 6개 계정 잔액 (기초 awal_* / 기말 akhir_*)
- Mutasi: 한 달 동안의 거래 금액 17개 필드
- MonthlyReport: 회원 1명의 한 기간 장부 (Keuangan)
- TransactionEntry: 관리자가 입력한 월간 거래 1건 (일회성 입력)
- TransactionLog: 거래 로그 (감사 추적)

금액은 루피아 정수 단위지만 Decimal로 다루고 문자열로 저장한다.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from core.ledger.errors import AmountValidationError
from core.ledger.types import (
    ALL_REKENING,
    MUTASI_FIELDS,
    PINJAMAN_REKENING,
    SETORAN_FIELDS,
    SIMPANAN_REKENING,
    Rekening,
)
from core.types import LogType

ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """금액 변환 (None/빈 문자열은 0)

    Raises:
        ValueError: 숫자로 해석할 수 없는 값, NaN/Infinity
    """
    if value is None or value == "":
        return ZERO
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")
    if isinstance(value, Decimal):
        amount = value
    else:
        if isinstance(value, float):
            value = repr(value)
        try:
            amount = Decimal(value)
        except (InvalidOperation, TypeError) as e:
            raise ValueError(f"Invalid amount: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return amount


@dataclass(frozen=True)
class Saldo:
    """계정 잔액 (불변)

    기초(awal)와 기말(akhir) 모두 이 타입을 사용.
    합계는 항상 구성 계정의 합으로 계산된다.
    """

    simpanan_pokok: Decimal = ZERO
    simpanan_wajib: Decimal = ZERO
    simpanan_sukarela: Decimal = ZERO
    simpanan_wisata: Decimal = ZERO
    pinjaman_berjangka: Decimal = ZERO
    pinjaman_khusus: Decimal = ZERO

    @classmethod
    def zero(cls) -> Saldo:
        return cls()

    def get(self, rekening: Rekening) -> Decimal:
        return getattr(self, rekening.value)

    @property
    def jumlah_total_simpanan(self) -> Decimal:
        """저축 4종 합계"""
        return sum((self.get(r) for r in SIMPANAN_REKENING), ZERO)

    @property
    def jumlah_total_pinjaman(self) -> Decimal:
        """대출 2종 합계"""
        return sum((self.get(r) for r in PINJAMAN_REKENING), ZERO)

    def to_dict(self, prefix: str) -> dict[str, str]:
        """{prefix}_{계정}: 금액 형태로 평탄화"""
        return {f"{prefix}_{r.value}": str(self.get(r)) for r in ALL_REKENING}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], prefix: str) -> Saldo:
        values: dict[str, Decimal] = {}
        for r in ALL_REKENING:
            key = f"{prefix}_{r.value}"
            raw = data.get(key)
            # 초기 데이터는 기초 자율 저축을 'sukarela' 키로 저장했음
            if raw is None and prefix == "awal" and r is Rekening.SIMPANAN_SUKARELA:
                raw = data.get("sukarela")
            values[r.value] = to_decimal(raw)
        return cls(**values)


@dataclass(frozen=True)
class Mutasi:
    """월간 거래 금액 (불변)

    같은 기간에 여러 번 입력된 거래는 더하기(+)로 합쳐지고,
    수정 시에는 빼기(-)로 차이(delta)를 구한다.
    """

    transaksi_simpanan_pokok: Decimal = ZERO
    transaksi_simpanan_wajib: Decimal = ZERO
    transaksi_simpanan_sukarela: Decimal = ZERO
    transaksi_simpanan_wisata: Decimal = ZERO
    transaksi_pinjaman_berjangka: Decimal = ZERO
    transaksi_pinjaman_khusus: Decimal = ZERO
    transaksi_simpanan_jasa: Decimal = ZERO
    transaksi_niaga: Decimal = ZERO
    transaksi_dana_perlaya: Decimal = ZERO
    transaksi_dana_katineng: Decimal = ZERO
    transaksi_pengambilan_simpanan_pokok: Decimal = ZERO
    transaksi_pengambilan_simpanan_wajib: Decimal = ZERO
    transaksi_pengambilan_simpanan_sukarela: Decimal = ZERO
    transaksi_pengambilan_simpanan_wisata: Decimal = ZERO
    transaksi_penambahan_pinjaman_berjangka: Decimal = ZERO
    transaksi_penambahan_pinjaman_khusus: Decimal = ZERO
    transaksi_penambahan_pinjaman_niaga: Decimal = ZERO

    def get(self, name: str) -> Decimal:
        return getattr(self, name)

    def __add__(self, other: Mutasi) -> Mutasi:
        if not isinstance(other, Mutasi):
            return NotImplemented
        return Mutasi(**{f: self.get(f) + other.get(f) for f in MUTASI_FIELDS})

    def __sub__(self, other: Mutasi) -> Mutasi:
        if not isinstance(other, Mutasi):
            return NotImplemented
        return Mutasi(**{f: self.get(f) - other.get(f) for f in MUTASI_FIELDS})

    def validate(self) -> None:
        """모든 필드가 유한한 Decimal인지 검사

        Raises:
            AmountValidationError: NaN/Infinity 또는 Decimal이 아닌 값
        """
        for f in MUTASI_FIELDS:
            value = self.get(f)
            if not isinstance(value, Decimal) or not value.is_finite():
                raise AmountValidationError(f, value)

    def is_zero(self) -> bool:
        """모든 필드가 0인지"""
        return all(self.get(f) == ZERO for f in MUTASI_FIELDS)

    @property
    def jumlah_setoran(self) -> Decimal:
        """입금 측 합계 (총 납입액)"""
        return sum((self.get(f) for f in SETORAN_FIELDS), ZERO)

    def non_zero(self) -> dict[str, Decimal]:
        """0이 아닌 필드만 (영수증/로그 표시용)"""
        return {f: self.get(f) for f in MUTASI_FIELDS if self.get(f) != ZERO}

    def to_dict(self) -> dict[str, str]:
        return {f: str(self.get(f)) for f in MUTASI_FIELDS}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Mutasi:
        """dict에서 생성 (없는 필드는 0, 알 수 없는 키는 무시)"""
        return cls(**{f: to_decimal(data.get(f)) for f in MUTASI_FIELDS})


@dataclass(frozen=True)
class MonthlyReport:
    """회원 장부 (한 기간)

    현재 스냅샷(keuangan)과 월간 이력(keuangan_history) 모두 이 형태.
    """

    no_anggota: str
    nama_anggota: str = ""
    periode: str | None = None
    tanggal_transaksi: str | None = None
    admin_nama: str | None = None
    awal: Saldo = field(default_factory=Saldo)
    mutasi: Mutasi = field(default_factory=Mutasi)
    akhir: Saldo = field(default_factory=Saldo)

    @property
    def jumlah_setoran(self) -> Decimal:
        return self.mutasi.jumlah_setoran

    @property
    def jumlah_total_simpanan(self) -> Decimal:
        return self.akhir.jumlah_total_simpanan

    @property
    def jumlah_total_pinjaman(self) -> Decimal:
        return self.akhir.jumlah_total_pinjaman

    def with_changes(self, **changes: Any) -> MonthlyReport:
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """저장/응답용 평탄화 dict"""
        data: dict[str, Any] = {
            "no_anggota": self.no_anggota,
            "nama_anggota": self.nama_anggota,
            "periode": self.periode,
            "tanggal_transaksi": self.tanggal_transaksi,
            "admin_nama": self.admin_nama,
        }
        data.update(self.awal.to_dict("awal"))
        data.update(self.mutasi.to_dict())
        data["jumlah_setoran"] = str(self.jumlah_setoran)
        data.update(self.akhir.to_dict("akhir"))
        data["jumlah_total_simpanan"] = str(self.jumlah_total_simpanan)
        data["jumlah_total_pinjaman"] = str(self.jumlah_total_pinjaman)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MonthlyReport:
        """평탄화 dict에서 복원

        jumlah_* 합계 필드는 저장되어 있어도 다시 계산한다.
        """
        return cls(
            no_anggota=data["no_anggota"],
            nama_anggota=data.get("nama_anggota") or data.get("nama_angota") or "",
            periode=data.get("periode"),
            tanggal_transaksi=data.get("tanggal_transaksi"),
            admin_nama=data.get("admin_nama"),
            awal=Saldo.from_dict(data, "awal"),
            mutasi=Mutasi.from_dict(data),
            akhir=Saldo.from_dict(data, "akhir"),
        )

    @classmethod
    def empty(cls, no_anggota: str, nama_anggota: str = "") -> MonthlyReport:
        """잔액 0인 빈 장부"""
        return cls(no_anggota=no_anggota, nama_anggota=nama_anggota)


@dataclass(frozen=True)
class TransactionEntry:
    """월간 거래 입력 1건

    저장되지 않고 해당 기간의 이력에 흡수된다.
    """

    no_anggota: str
    mutasi: Mutasi = field(default_factory=Mutasi)
    nama_anggota: str | None = None
    admin_nama: str | None = None
    tanggal_transaksi: str | None = None


@dataclass(frozen=True)
class BatchError:
    """배치 처리 중 회원별 실패"""

    no_anggota: str
    error: str


@dataclass
class BatchResult:
    """월간 배치 처리 결과

    Attributes:
        success_count: 성공한 회원 수
        error_count: 실패한 회원 수
        errors: 실패 목록 (회원번호, 오류 메시지)
        posted: 성공한 입력 (이름 확정 후, 로그 기록용)
    """

    success_count: int = 0
    error_count: int = 0
    errors: list[BatchError] = field(default_factory=list)
    posted: list[TransactionEntry] = field(default_factory=list)

    @property
    def is_complete_success(self) -> bool:
        """오류 없이 1건 이상 성공"""
        return self.error_count == 0 and self.success_count > 0


@dataclass(frozen=True)
class TransactionLog:
    """거래 로그 (감사 추적)

    신규 입력(NEW)과 과거 거래 수정(EDIT)을 구분한다.
    """

    log_id: str
    no_anggota: str
    periode: str
    admin_nama: str
    mutasi: Mutasi
    nama_anggota: str = ""
    tanggal_transaksi: str | None = None
    log_type: LogType = LogType.NEW
    log_time: str | None = None
    edited_by: str | None = None
    edited_at: str | None = None

    @property
    def jumlah_setoran(self) -> Decimal:
        return self.mutasi.jumlah_setoran

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "log_id": self.log_id,
            "no_anggota": self.no_anggota,
            "nama_anggota": self.nama_anggota,
            "periode": self.periode,
            "admin_nama": self.admin_nama,
            "tanggal_transaksi": self.tanggal_transaksi,
            "log_type": self.log_type.value,
            "log_time": self.log_time,
            "edited_by": self.edited_by,
            "edited_at": self.edited_at,
        }
        data.update(self.mutasi.to_dict())
        data["jumlah_setoran"] = str(self.jumlah_setoran)
        return data


__all__ = [
    "ZERO",
    "to_decimal",
    "Saldo",
    "Mutasi",
    "MonthlyReport",
    "TransactionEntry",
    "BatchError",
    "BatchResult",
    "TransactionLog",
]