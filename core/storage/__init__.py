"""
스토리지 모듈

회원 명부, 설정, 공지사항, 대출 신청 저장소 제공
"""

from core.storage.anggota_store import Anggota, MemberDirectory, MemberExistsError
from core.storage.config_store import ConfigStore, init_default_configs
from core.storage.pengumuman_store import AnnouncementStore, Pengumuman
from core.storage.pinjaman_store import (
    InvalidStatusTransitionError,
    LoanApplicationStore,
    PengajuanPinjaman,
)

__all__ = [
    "Anggota",
    "MemberDirectory",
    "MemberExistsError",
    "ConfigStore",
    "init_default_configs",
    "AnnouncementStore",
    "Pengumuman",
    "LoanApplicationStore",
    "PengajuanPinjaman",
    "InvalidStatusTransitionError",
]
