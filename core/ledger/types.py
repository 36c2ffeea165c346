"""
장부 타입 정의

회원 장부의 6개 계정과 월간 거래(mutasi) 필드 이름 정의.
필드 이름은 저장 형식(JSON 키)과 동일.
"""

from enum import Enum


class Rekening(str, Enum):
    """장부 계정

    저축 4종 + 대출 2종.
    str을 상속하여 JSON 직렬화 가능.
    """

    SIMPANAN_POKOK = "simpanan_pokok"  # 기본 출자금
    SIMPANAN_WAJIB = "simpanan_wajib"  # 의무 저축
    SIMPANAN_SUKARELA = "simpanan_sukarela"  # 자율 저축
    SIMPANAN_WISATA = "simpanan_wisata"  # 여행 적립
    PINJAMAN_BERJANGKA = "pinjaman_berjangka"  # 기간 대출
    PINJAMAN_KHUSUS = "pinjaman_khusus"  # 특별 대출

    @property
    def is_pinjaman(self) -> bool:
        """대출 계정 여부"""
        return self.value.startswith("pinjaman_")


SIMPANAN_REKENING: tuple[Rekening, ...] = (
    Rekening.SIMPANAN_POKOK,
    Rekening.SIMPANAN_WAJIB,
    Rekening.SIMPANAN_SUKARELA,
    Rekening.SIMPANAN_WISATA,
)

PINJAMAN_REKENING: tuple[Rekening, ...] = (
    Rekening.PINJAMAN_BERJANGKA,
    Rekening.PINJAMAN_KHUSUS,
)

ALL_REKENING: tuple[Rekening, ...] = SIMPANAN_REKENING + PINJAMAN_REKENING


def credit_field(rekening: Rekening) -> str:
    """잔액을 늘리는 거래 필드

    저축: 입금 (transaksi_simpanan_*)
    대출: 추가 대출 (transaksi_penambahan_pinjaman_*)
    """
    if rekening.is_pinjaman:
        return f"transaksi_penambahan_{rekening.value}"
    return f"transaksi_{rekening.value}"


def debit_field(rekening: Rekening) -> str:
    """잔액을 줄이는 거래 필드

    저축: 인출 (transaksi_pengambilan_simpanan_*)
    대출: 상환 (transaksi_pinjaman_*)
    """
    if rekening.is_pinjaman:
        return f"transaksi_{rekening.value}"
    return f"transaksi_pengambilan_{rekening.value}"


# 입금 측 필드 (jumlah_setoran 합산 대상)
SETORAN_FIELDS: tuple[str, ...] = (
    "transaksi_simpanan_pokok",
    "transaksi_simpanan_wajib",
    "transaksi_simpanan_sukarela",
    "transaksi_simpanan_wisata",
    "transaksi_pinjaman_berjangka",
    "transaksi_pinjaman_khusus",
    "transaksi_simpanan_jasa",
    "transaksi_niaga",
    "transaksi_dana_perlaya",
    "transaksi_dana_katineng",
)

# 인출/추가 대출 측 필드
PENGELUARAN_FIELDS: tuple[str, ...] = (
    "transaksi_pengambilan_simpanan_pokok",
    "transaksi_pengambilan_simpanan_wajib",
    "transaksi_pengambilan_simpanan_sukarela",
    "transaksi_pengambilan_simpanan_wisata",
    "transaksi_penambahan_pinjaman_berjangka",
    "transaksi_penambahan_pinjaman_khusus",
    "transaksi_penambahan_pinjaman_niaga",  # 잔액 계정 없음, 기록만
)

MUTASI_FIELDS: tuple[str, ...] = SETORAN_FIELDS + PENGELUARAN_FIELDS
