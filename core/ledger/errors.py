"""
Ledger 예외 정의

- ValidationError: 분개 검증 실패 (사용자가 입력 수정 후 재시도)
- AccountReferenceError: 존재하지 않거나 비활성인 계정 참조
- PostingError: 승인 후 원장 전기 실패 (재시도 가능)
- DateRangeError: 잘못된 조회 기간 (잔액 계산에서는 무제한으로 처리)
- AccountError: 계정과목 등록/수정/비활성화 규칙 위반
- JournalStateError: 허용되지 않은 분개 상태 전이
- NotFoundError: 존재하지 않는 계정 또는 분개
"""


class LedgerError(Exception):
    """Ledger 예외 기본 클래스"""

    pass


class ValidationError(LedgerError):
    """분개 검증 실패"""

    pass


class AccountReferenceError(ValidationError):
    """분개 라인이 존재하지 않거나 비활성인 계정을 참조

    Args:
        message: 사용자 표시 메시지
        account_id: 참조된 계정 ID
    """

    def __init__(self, message: str, account_id: str | None = None):
        super().__init__(message)
        self.account_id = account_id


class PostingError(LedgerError):
    """원장 전기 실패

    분개는 approved 상태로 남고 posted=False로 유지되어
    완료된 전기와 구분됨. 동일 호출을 재시도해도 중복 라인은 생기지 않음.

    Args:
        message: 오류 메시지
        journal_id: 분개 ID
        pending_keys: 저장되지 않은(실패한) 라인 멱등성 키 목록
        posted_keys: 이번 시도 전에 이미 저장되어 있던 라인 키 목록 (롤백 영향 없음)
    """

    def __init__(
        self,
        message: str,
        journal_id: str | None = None,
        pending_keys: list[str] | None = None,
        posted_keys: list[str] | None = None,
    ):
        super().__init__(message)
        self.journal_id = journal_id
        self.pending_keys = pending_keys or []
        self.posted_keys = posted_keys or []


class DateRangeError(LedgerError):
    """잘못된 조회 기간"""

    pass


class AccountError(LedgerError):
    """계정과목 규칙 위반"""

    pass


class JournalStateError(LedgerError):
    """허용되지 않은 분개 상태 전이"""

    pass


class NotFoundError(LedgerError):
    """존재하지 않는 계정 또는 분개"""

    pass
