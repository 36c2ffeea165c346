"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → koperasi/)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class Defaults:
    """기본값 상수"""

    KOPERASI_NAME: str = "Koperasi"

    # 이름을 확인할 수 없는 회원의 표시 이름
    MEMBER_NAME_FALLBACK: str = "Anggota"

    # 로그/이력에 기록되는 시스템 작업자
    SYSTEM_ADMIN_NAME: str = "Sistem"

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 8000

    LOG_LEVEL: str = "INFO"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    WEB_LOGS_DIR: Path = LOGS_DIR / "web"
    CLI_LOGS_DIR: Path = LOGS_DIR / "cli"

    # 설정 파일
    SETTINGS_FILE: Path = CONFIG_DIR / "settings.yaml"

    # DB 파일
    PROD_DB: Path = DATA_DIR / "koperasi_prod.db"
    DEV_DB: Path = DATA_DIR / "koperasi_dev.db"


# 기간 문자열 형식 (YYYY-MM)
PERIOD_PATTERN: str = r"^\d{4}-(0[1-9]|1[0-2])$"
