"""
타임존 유틸리티

내부 저장: UTC | 외부 표시: WIB(Asia/Jakarta) 원칙 준수를 위한 헬퍼 함수
"""

from datetime import datetime, timezone, timedelta

# WIB 타임존 (UTC+7)
WIB = timezone(timedelta(hours=7))


def to_wib(dt: datetime) -> datetime:
    """UTC datetime을 WIB로 변환

    Args:
        dt: datetime 객체 (UTC 권장, naive면 UTC로 간주)

    Returns:
        WIB 타임존의 datetime

    Example:
        >>> utc_dt = datetime(2024, 2, 20, 18, 0, 0, tzinfo=timezone.utc)
        >>> to_wib(utc_dt).hour
        1  # 다음날 01:00
    """
    if dt.tzinfo is None:
        # naive datetime은 UTC로 간주
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(WIB)


def now_utc() -> datetime:
    """현재 UTC 시간 반환 (타임존 명시)

    Returns:
        현재 UTC 시간 (tzinfo=timezone.utc)
    """
    return datetime.now(timezone.utc)


def now_utc_iso() -> str:
    """현재 UTC 시간의 ISO 8601 문자열 (DB 저장용)"""
    return now_utc().isoformat()


def today_wib() -> str:
    """오늘 날짜 (WIB 기준, YYYY-MM-DD)

    거래일(tanggal_transaksi)이 지정되지 않았을 때의 기본값.
    """
    return to_wib(now_utc()).strftime("%Y-%m-%d")
