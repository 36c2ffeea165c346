"""
요청 스키마 (Pydantic)

Web API 요청 데이터 검증
"""

from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, Field

from core.ledger.models import Mutasi, TransactionEntry


class MutasiRequest(BaseModel):
    """월간 거래 금액 (루피아)

    입력하지 않은 필드는 0.
    """

    transaksi_simpanan_pokok: Decimal = Field(default=Decimal("0"), ge=0, description="기본 출자금 입금")
    transaksi_simpanan_wajib: Decimal = Field(default=Decimal("0"), ge=0, description="의무 저축 입금")
    transaksi_simpanan_sukarela: Decimal = Field(default=Decimal("0"), ge=0, description="자율 저축 입금")
    transaksi_simpanan_wisata: Decimal = Field(default=Decimal("0"), ge=0, description="여행 적립 입금")
    transaksi_pinjaman_berjangka: Decimal = Field(default=Decimal("0"), ge=0, description="기간 대출 상환")
    transaksi_pinjaman_khusus: Decimal = Field(default=Decimal("0"), ge=0, description="특별 대출 상환")
    transaksi_simpanan_jasa: Decimal = Field(default=Decimal("0"), ge=0, description="서비스 수수료(jasa)")
    transaksi_niaga: Decimal = Field(default=Decimal("0"), ge=0, description="상거래(niaga) 납입")
    transaksi_dana_perlaya: Decimal = Field(default=Decimal("0"), ge=0, description="perlaya 기금")
    transaksi_dana_katineng: Decimal = Field(default=Decimal("0"), ge=0, description="katineng 기금")
    transaksi_pengambilan_simpanan_pokok: Decimal = Field(default=Decimal("0"), ge=0, description="기본 출자금 인출")
    transaksi_pengambilan_simpanan_wajib: Decimal = Field(default=Decimal("0"), ge=0, description="의무 저축 인출")
    transaksi_pengambilan_simpanan_sukarela: Decimal = Field(default=Decimal("0"), ge=0, description="자율 저축 인출")
    transaksi_pengambilan_simpanan_wisata: Decimal = Field(default=Decimal("0"), ge=0, description="여행 적립 인출")
    transaksi_penambahan_pinjaman_berjangka: Decimal = Field(default=Decimal("0"), ge=0, description="기간 대출 추가")
    transaksi_penambahan_pinjaman_khusus: Decimal = Field(default=Decimal("0"), ge=0, description="특별 대출 추가")
    transaksi_penambahan_pinjaman_niaga: Decimal = Field(default=Decimal("0"), ge=0, description="niaga 대출 추가 (기록만)")

    def to_mutasi(self) -> Mutasi:
        return Mutasi.from_dict(self.model_dump())


class TransactionEntryRequest(MutasiRequest):
    """회원 1명의 월간 거래 입력"""

    no_anggota: str = Field(default="", description="회원번호")
    nama_anggota: str | None = Field(default=None, description="회원 이름 (없으면 명부에서 조회)")
    tanggal_transaksi: str | None = Field(default=None, description="거래일 (YYYY-MM-DD, 없으면 오늘)")

    def to_entry(self, admin_nama: str) -> TransactionEntry:
        return TransactionEntry(
            no_anggota=self.no_anggota.strip().upper(),
            mutasi=self.to_mutasi(),
            nama_anggota=self.nama_anggota,
            admin_nama=admin_nama,
            tanggal_transaksi=self.tanggal_transaksi,
        )


class BatchPostRequest(BaseModel):
    """월간 거래 배치 게시 요청"""

    periode: str = Field(..., description="대상 기간 (YYYY-MM)")
    admin_nama: str = Field(..., min_length=1, description="입력 관리자 이름")
    entries: list[TransactionEntryRequest] = Field(default_factory=list, description="회원별 거래")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "periode": "2024-01",
                    "admin_nama": "Budi",
                    "entries": [
                        {"no_anggota": "AK-001", "transaksi_simpanan_wajib": "100000"},
                    ],
                },
            ]
        }
    }


class CorrectionRequest(MutasiRequest):
    """과거 거래 수정 요청 (수정 후 전체 금액)"""

    editor: str = Field(..., min_length=1, description="수정자 이름")


class AnggotaCreateRequest(BaseModel):
    """회원 등록 요청"""

    no_anggota: str = Field(..., min_length=1, description="회원번호")
    nama: str = Field(..., min_length=1, description="이름")
    email: str | None = Field(default=None, description="이메일")
    phone: str | None = Field(default=None, description="전화번호")
    address: str | None = Field(default=None, description="주소")
    join_date: str | None = Field(default=None, description="가입일 (YYYY-MM-DD)")
    status: Literal["Aktif", "Tidak Aktif"] = Field(default="Aktif", description="회원 상태")


class AnggotaUpdateRequest(BaseModel):
    """회원 정보 수정 요청 (입력한 필드만 변경)"""

    nama: str | None = Field(default=None, min_length=1, description="이름")
    email: str | None = Field(default=None, description="이메일")
    phone: str | None = Field(default=None, description="전화번호")
    address: str | None = Field(default=None, description="주소")
    join_date: str | None = Field(default=None, description="가입일 (YYYY-MM-DD)")
    status: Literal["Aktif", "Tidak Aktif"] | None = Field(default=None, description="회원 상태")


class ConfigUpdateRequest(BaseModel):
    """설정 변경 요청 (기존 값에 병합)"""

    value: dict[str, Any] = Field(..., description="변경할 필드")
    updated_by: str = Field(default="admin", description="수정자")


class PengumumanCreateRequest(BaseModel):
    """공지사항 등록 요청"""

    judul: str = Field(..., min_length=1, description="제목")
    isi: str = Field(..., description="내용")
    tanggal: str = Field(..., description="게시일 (YYYY-MM-DD)")
    penulis: str | None = Field(default=None, description="작성자")


class PengumumanUpdateRequest(BaseModel):
    """공지사항 수정 요청"""

    judul: str | None = Field(default=None, min_length=1, description="제목")
    isi: str | None = Field(default=None, description="내용")
    tanggal: str | None = Field(default=None, description="게시일 (YYYY-MM-DD)")
    penulis: str | None = Field(default=None, description="작성자")


class PengajuanCreateRequest(BaseModel):
    """대출 신청 요청"""

    no_anggota: str = Field(..., min_length=1, description="회원번호")
    nama_anggota: str = Field(default="", description="회원 이름")
    jenis_pinjaman: str = Field(..., min_length=1, description="대출 종류 (Berjangka/Khusus 등)")
    jumlah: Decimal = Field(..., gt=0, description="신청 금액")
    jangka_waktu: int = Field(..., gt=0, description="상환 기간 (개월)")
    keperluan: str | None = Field(default=None, description="용도")


class PengajuanStatusRequest(BaseModel):
    """대출 신청 승인/거절 요청"""

    status: Literal["Disetujui", "Ditolak"] = Field(..., description="결정 상태")
    diputuskan_oleh: str | None = Field(default=None, description="결정한 관리자")
