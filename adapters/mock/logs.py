"""
Mock 에러/감사 로그

테스트용 인메모리 로그 협력자.
IErrorLog, IAuditLog Protocol 준수.
"""

from core.domain.events import AuditEvent, ErrorEvent


class MockLedgerLog:
    """인메모리 에러/감사 로그

    사용 예시:
    ```python
    log = MockLedgerLog()
    validator = JournalValidator(error_log=log)

    await validator.validate(entry, accounts, acting_user="kim")
    assert log.errors[0].context == "JE_VALIDATION"
    ```
    """

    def __init__(self) -> None:
        self.errors: list[ErrorEvent] = []
        self.audits: list[AuditEvent] = []

    async def record_error(self, event: ErrorEvent) -> None:
        """에러 이벤트 기록"""
        self.errors.append(event)

    async def record_audit(self, event: AuditEvent) -> None:
        """감사 이벤트 기록"""
        self.audits.append(event)

    def clear(self) -> None:
        """기록 초기화"""
        self.errors.clear()
        self.audits.clear()

    @property
    def last_error(self) -> ErrorEvent | None:
        """마지막 에러 이벤트"""
        return self.errors[-1] if self.errors else None
