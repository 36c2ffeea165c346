"""
로깅 설정 유틸리티

Web 서버와 관리 스크립트(init_db, sync_logs)가 공유하는 로깅 설정.
- 콘솔: INFO 레벨
- 프로세스 로그: logs/<process>/<process>.log (자정마다 롤링)
- 장부 감사 로그: logs/<process>/ledger.log (core.ledger 로거만 기록)

사용법:
    from core.logging import setup_logging
    setup_logging("web")
    setup_logging("cli", log_dir=Path("/tmp/koperasi-logs"))
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.constants import Paths


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# 월 마감 후 정산 확인까지 한 달 이상 보관
LOG_FILE_BACKUP_COUNT = 45
LEDGER_LOG_BACKUP_COUNT = 400

LEDGER_LOGGER_NAME = "core.ledger"

PROCESS_LOG_DIRS: dict[str, Path] = {
    "web": Paths.WEB_LOGS_DIR,
    "cli": Paths.CLI_LOGS_DIR,
}

NOISY_LOGGERS = [
    "aiosqlite",      # 쿼리마다 executing/completed
    "httpcore",
    "httpx",
    "asyncio",
    "uvicorn.access",
]


def _daily_handler(path: Path, level: int, backup_count: int) -> TimedRotatingFileHandler:
    handler = TimedRotatingFileHandler(
        filename=path,
        when="midnight",
        interval=1,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.suffix = "%Y-%m-%d"  # ledger.log.2024-03-01
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    return handler


def setup_logging(
    process_name: str,
    console_level: int = logging.INFO,
    file_level: int = logging.INFO,
    log_dir: Path | None = None,
) -> logging.Logger:
    """로깅 설정 초기화

    게시, 수정, 보고서 삭제 같은 장부 변경은 core.ledger 하위 로거로 기록되므로
    별도 ledger.log에도 남는다. 감사 로그는 프로세스 로그보다 오래 보관한다.

    Args:
        process_name: 프로세스 이름 ("web" 또는 "cli")
        console_level: 콘솔 로그 레벨
        file_level: 프로세스 로그 파일 레벨
        log_dir: 로그 디렉토리 (기본: 프로세스별 logs 하위 디렉토리)

    Returns:
        설정된 루트 Logger
    """
    if log_dir is None:
        log_dir = get_log_dir(process_name)
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / f"{process_name}.log"
    ledger_file = log_dir / "ledger.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # 핸들러에서 필터링
    root_logger.handlers.clear()  # 재호출 시 중복 방지

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root_logger.addHandler(console_handler)

    root_logger.addHandler(_daily_handler(log_file, file_level, LOG_FILE_BACKUP_COUNT))

    ledger_logger = logging.getLogger(LEDGER_LOGGER_NAME)
    for handler in ledger_logger.handlers[:]:
        ledger_logger.removeHandler(handler)
        handler.close()
    ledger_logger.addHandler(
        _daily_handler(ledger_file, logging.INFO, LEDGER_LOG_BACKUP_COUNT)
    )

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    root_logger.info(f"Logging initialized: {process_name} -> {log_file}")
    return root_logger


def get_log_dir(process_name: str) -> Path:
    """프로세스별 로그 디렉토리 (알 수 없는 이름은 logs 루트)"""
    return PROCESS_LOG_DIRS.get(process_name, Paths.LOGS_DIR)


def get_log_file_path(process_name: str) -> Path:
    return get_log_dir(process_name) / f"{process_name}.log"
