"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class AppMode(str, Enum):
    """운영 모드 (실서비스 / 개발)"""

    PRODUCTION = "production"
    DEVELOPMENT = "development"


class LogType(str, Enum):
    """거래 로그 구분"""

    NEW = "NEW"  # 신규 입력
    EDIT = "EDIT"  # 과거 거래 수정


class MemberStatus(str, Enum):
    """회원 상태"""

    AKTIF = "Aktif"
    TIDAK_AKTIF = "Tidak Aktif"


class LoanApplicationStatus(str, Enum):
    """대출 신청 상태"""

    MENUNGGU = "Menunggu Persetujuan"
    DISETUJUI = "Disetujui"
    DITOLAK = "Ditolak"
