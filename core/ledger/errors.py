"""
장부 예외 정의

LedgerError를 기반으로 하고, 표준 예외(ValueError/LookupError)도 함께 상속해
호출 측에서 어느 쪽으로든 잡을 수 있다.
"""


class LedgerError(Exception):
    """장부 처리 오류 기본 클래스"""


class PeriodFormatError(LedgerError, ValueError):
    """기간 형식 오류 (YYYY-MM 아님)"""

    def __init__(self, periode: object):
        self.periode = periode
        super().__init__(f"Invalid period format (expected YYYY-MM): {periode!r}")


class MemberValidationError(LedgerError, ValueError):
    """회원 번호 누락 등 입력 오류"""


class LogNotFoundError(LedgerError, LookupError):
    """거래 로그 없음"""

    def __init__(self, log_id: str):
        self.log_id = log_id
        super().__init__(f"Transaction log not found: {log_id}")


class HistoryNotFoundError(LedgerError, LookupError):
    """회원의 해당 기간 이력 없음"""

    def __init__(self, no_anggota: str, periode: str):
        self.no_anggota = no_anggota
        self.periode = periode
        super().__init__(f"History not found: {no_anggota} / {periode}")


class AmountValidationError(LedgerError, ValueError):
    """금액 오류 (NaN/Infinity 등 유한하지 않은 값)"""

    def __init__(self, field_name: str, value: object):
        self.field_name = field_name
        self.value = value
        super().__init__(f"Invalid amount for {field_name}: {value!r}")
