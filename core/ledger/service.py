"""
Ledger 서비스

분개 워크플로우와 계정과목 관리, 보고서 생성을 하나로 묶는 조정자.

분개 흐름:
    제출 → 검증 → 저장(pending) → 매니저 알림
    승인 → 원장 라인 생성 → 상태 저장 → 전기(트랜잭션) → 작성자 알림
    반려 → 상태 저장 → 작성자 알림

순수 계산(검증, 전기 변환, 잔액, 보고서)은 core.ledger의 각 모듈이 담당하고
이 서비스는 저장소/알림/감사 로그 협력자 호출 순서만 결정.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from core.constants import ErrorContexts
from core.domain.events import AuditEvent, ErrorEvent, Notification
from core.ledger.accounts import (
    Account,
    accounts_by_id,
    ensure_can_deactivate,
    ensure_unique,
    validate_account_form,
)
from core.ledger.balances import (
    BalanceSnapshot,
    RunningBalanceRow,
    compute_balances,
    ending_balance,
    normalize_range,
    running_balances,
)
from core.ledger.errors import AccountError, NotFoundError, PostingError, ValidationError
from core.ledger.journal import (
    JournalEntry,
    approve,
    entry_from_document,
    filter_entries,
    reject,
)
from core.ledger.money import Money
from core.ledger.poster import LedgerLine, LedgerPoster
from core.ledger.statements import (
    BalanceSheet,
    IncomeStatement,
    RetainedEarningsStatement,
    TrialBalance,
    balance_sheet,
    income_statement,
    retained_earnings_statement,
    trial_balance,
)
from core.ledger.store import PostingResult
from core.ledger.types import JournalStatus, NotificationType
from core.ledger.validator import JournalValidator
from core.types import AuditAction, EntityKind, UserRole
from core.utils.timezone import now_utc

if TYPE_CHECKING:
    from adapters.interfaces import INotifier
    from core.ledger.store import LedgerStore

logger = logging.getLogger(__name__)

# 계정 수정 시 변경 가능한 필드 (id, created_by 제외)
EDITABLE_ACCOUNT_FIELDS = frozenset({
    "name",
    "number",
    "category",
    "subcategory",
    "normal_side",
    "initial_balance",
    "active",
    "description",
    "statement",
    "order",
    "comment",
})


class LedgerService:
    """Ledger 서비스

    Args:
        store: Ledger 저장소 (에러/감사 로그 협력자 겸용)
        notifier: 외부 알림 서비스 (None이면 알림함에만 저장)
        retained_earnings_opening: 이익잉여금 기초 잔액

    사용 예시:
    ```python
    service = LedgerService(LedgerStore(db), notifier=slack)

    entry = await service.submit_entry(draft, acting_user="kim@example.com")
    await service.approve_entry(entry.id, acting_user="lee@example.com")

    report = await service.get_trial_balance(to="2026-03-31")
    ```
    """

    def __init__(
        self,
        store: LedgerStore,
        notifier: INotifier | None = None,
        retained_earnings_opening: Money | None = None,
    ):
        self.store = store
        self.notifier = notifier
        self.retained_earnings_opening = retained_earnings_opening or Money.zero()
        self.validator = JournalValidator(error_log=store)
        self.poster = LedgerPoster()

    # =========================================================================
    # 분개
    # =========================================================================

    async def submit_entry(
        self,
        draft: JournalEntry | Mapping[str, Any],
        acting_user: str,
    ) -> JournalEntry:
        """분개 제출

        검증 통과 시 pending 상태로 저장하고 매니저에게 승인 요청 알림.

        Args:
            draft: 분개 초안 (JournalEntry 또는 문서 dict)
            acting_user: 작성자

        Returns:
            저장된 분개

        Raises:
            ValidationError: 검증 실패 (에러 로그에 JE_VALIDATION으로 기록됨)
        """
        if not isinstance(draft, JournalEntry):
            document = dict(draft)
            document.setdefault("id", str(uuid4()))
            try:
                draft = entry_from_document(document, strict=True)
            except ValidationError as e:
                logger.warning(f"분개 문서 정규화 실패: {e}", extra={"user": acting_user})
                await self.store.record_error(ErrorEvent.create(
                    user=acting_user, message=str(e), context=ErrorContexts.JE_VALIDATION,
                ))
                raise
        elif not draft.id:
            draft = replace(draft, id=str(uuid4()))

        accounts = await self.store.get_accounts()
        await self.validator.check(draft, accounts, acting_user)

        lookup = accounts_by_id(accounts)
        lines = [
            replace(line, account_name=lookup[line.account_id].name)
            if not line.account_name and line.account_id in lookup
            else line
            for line in draft.lines
        ]
        now = now_utc()
        entry = replace(
            draft,
            lines=lines,
            date=draft.date or now.date(),
            status=JournalStatus.PENDING.value,
            prepared_by=acting_user,
            created_at=draft.created_at or now,
            approved_by=None,
            approved_at=None,
            rejected_by=None,
            rejected_at=None,
            rejection_reason=None,
            posted=False,
        )

        try:
            await self.store.save_entry(entry)
        except Exception as e:
            logger.error(f"분개 저장 실패: {entry.id}: {e}")
            await self.store.record_error(
                ErrorEvent.create(user=acting_user, message=str(e), context=ErrorContexts.JE_SUBMIT)
            )
            raise

        logger.info(
            f"분개 제출: {entry.id} ({entry.total_debits})",
            extra={"entry_id": entry.id, "user": acting_user},
        )

        await self._notify(Notification(
            recipient=UserRole.MANAGER.value,
            message=f"New journal entry submitted by {acting_user}: {entry.description}",
            type=NotificationType.JOURNAL_SUBMITTED.value,
            entry_id=entry.id,
        ))
        return entry

    async def approve_entry(
        self,
        entry_id: str,
        acting_user: str,
        at: datetime | None = None,
    ) -> JournalEntry:
        """분개 승인 및 원장 전기

        원장 라인을 먼저 만들어 차대 불일치를 상태 변경 전에 거르고,
        승인 상태 저장 후 라인 전체를 하나의 트랜잭션으로 전기.
        전기 실패 시 분개는 approved/posted=False로 남아 retry_posting() 대상이 됨.

        Raises:
            NotFoundError: 분개 없음
            JournalStateError: pending이 아닌 분개
            PostingError: 원장 라인 생성/저장 실패
        """
        entry = await self._get_entry_or_raise(entry_id)
        at = at or now_utc()

        approved = approve(entry, acting_user, at)
        lines = self.poster.post(approved, acting_user, posted_at=at)

        await self.store.update_entry_status(approved)
        await self.store.record_audit(AuditEvent.create(
            entity=EntityKind.JOURNAL_ENTRY.value,
            entity_id=entry.id,
            action=AuditAction.APPROVE.value,
            user=acting_user,
            before=entry.to_dict(),
            after=approved.to_dict(),
        ))

        await self._save_postings(approved, lines, acting_user)
        posted = replace(approved, posted=True)

        logger.info(
            f"분개 승인 및 전기 완료: {entry.id} ({len(lines)} lines)",
            extra={"entry_id": entry.id, "user": acting_user},
        )

        if posted.prepared_by:
            await self._notify(Notification(
                recipient=posted.prepared_by,
                message=f"Your journal entry '{posted.description}' was approved by {acting_user}.",
                type=NotificationType.APPROVAL.value,
                entry_id=posted.id,
            ))
        return posted

    async def retry_posting(self, entry_id: str, acting_user: str) -> PostingResult:
        """전기가 끝나지 않은 승인 분개 재전기

        이미 저장된 라인은 멱등성 키로 건너뜀.

        Raises:
            NotFoundError: 분개 없음
            PostingError: approved가 아니거나 저장 실패
        """
        entry = await self._get_entry_or_raise(entry_id)
        already_posted = await self.store.get_posted_keys(entry.id)
        lines = self.poster.post(entry, acting_user, already_posted=already_posted)
        result = await self._save_postings(entry, lines, acting_user)
        logger.info(
            f"분개 재전기: {entry.id} (신규 {len(result.inserted)}, 중복 {len(result.skipped)})"
        )
        return result

    async def reject_entry(
        self,
        entry_id: str,
        acting_user: str,
        reason: str | None = None,
        at: datetime | None = None,
    ) -> JournalEntry:
        """분개 반려 (전기하지 않음)

        Raises:
            NotFoundError: 분개 없음
            JournalStateError: pending이 아닌 분개
        """
        entry = await self._get_entry_or_raise(entry_id)
        rejected = reject(entry, acting_user, at or now_utc(), reason=reason)

        await self.store.update_entry_status(rejected)
        await self.store.record_audit(AuditEvent.create(
            entity=EntityKind.JOURNAL_ENTRY.value,
            entity_id=entry.id,
            action=AuditAction.REJECT.value,
            user=acting_user,
            before=entry.to_dict(),
            after=rejected.to_dict(),
        ))

        logger.info(
            f"분개 반려: {entry.id}",
            extra={"entry_id": entry.id, "user": acting_user},
        )

        if rejected.prepared_by:
            message = f"Your journal entry '{rejected.description}' was rejected by {acting_user}."
            if reason:
                message += f" Reason: {reason}"
            await self._notify(Notification(
                recipient=rejected.prepared_by,
                message=message,
                type=NotificationType.REJECTION.value,
                entry_id=rejected.id,
            ))
        return rejected

    async def get_entry(self, entry_id: str) -> JournalEntry:
        """분개 조회

        Raises:
            NotFoundError: 분개 없음
        """
        return await self._get_entry_or_raise(entry_id)

    async def list_entries(
        self,
        status: str | None = None,
        from_: Any = None,
        to: Any = None,
        search: str | None = None,
    ) -> list[JournalEntry]:
        """분개 목록 (상태, 기간, 검색어 필터)"""
        period = normalize_range(from_, to)
        entries = await self.store.get_entries()
        return filter_entries(
            entries,
            status=status,
            from_date=period.start,
            to_date=period.end,
            search=search,
        )

    async def list_notifications(self, recipient: str | None = None) -> list[Notification]:
        """알림함 조회 (사용자 이메일 또는 역할)"""
        return await self.store.get_notifications(recipient)

    async def _get_entry_or_raise(self, entry_id: str) -> JournalEntry:
        entry = await self.store.get_entry(entry_id)
        if entry is None:
            raise NotFoundError(f"Journal entry {entry_id} not found")
        return entry

    async def _save_postings(
        self,
        entry: JournalEntry,
        lines: list[LedgerLine],
        acting_user: str,
    ) -> PostingResult:
        try:
            return await self.store.save_ledger_lines(entry.id, lines)
        except PostingError as e:
            await self.store.record_error(
                ErrorEvent.create(user=acting_user, message=str(e), context=ErrorContexts.JE_POSTING)
            )
            raise

    async def _notify(self, notification: Notification) -> None:
        """알림함 저장 + 외부 알림 (전송 실패는 경고 로그만)"""
        await self.store.save_notification(notification)
        if self.notifier is None:
            return

        sent = await self.notifier.send_journal_notification(notification)
        if not sent:
            logger.warning(
                f"알림 전송 실패: {notification.type} → {notification.recipient}",
                extra={"entry_id": notification.entry_id},
            )

    # =========================================================================
    # 계정과목
    # =========================================================================

    async def create_account(self, account: Account, acting_user: str) -> Account:
        """계정 등록

        Raises:
            AccountError: 입력 규칙 위반 또는 이름/번호 중복
        """
        await self._check_account_form(account, acting_user)
        existing = await self.store.get_accounts()
        ensure_unique(existing, account.name, account.number)

        created = replace(
            account,
            id=account.id or str(uuid4()),
            created_by=account.created_by or acting_user,
        )
        await self.store.create_account(created)
        await self.store.record_audit(AuditEvent.create(
            entity=EntityKind.ACCOUNT.value,
            entity_id=created.id,
            action=AuditAction.CREATE.value,
            user=acting_user,
            before=None,
            after=created.to_dict(),
        ))

        logger.info(f"계정 등록: {created.label}", extra={"user": acting_user})
        return created

    async def update_account(
        self,
        account_id: str,
        changes: Mapping[str, Any],
        acting_user: str,
    ) -> Account:
        """계정 수정

        active를 False로 바꾸는 수정은 비활성화 규칙을 함께 적용.

        Raises:
            NotFoundError: 계정 없음
            AccountError: 입력 규칙 위반, 중복, 잔액이 남은 계정 비활성화
        """
        unknown = set(changes) - EDITABLE_ACCOUNT_FIELDS
        if unknown:
            raise AccountError(f"Unknown account fields: {', '.join(sorted(unknown))}")

        before = await self._get_account_or_raise(account_id)
        updated = replace(before, **dict(changes))
        updated = replace(updated, initial_balance=Money.parse(updated.initial_balance))

        await self._check_account_form(updated, acting_user)
        accounts = await self.store.get_accounts()
        ensure_unique(accounts, updated.name, updated.number, exclude_id=account_id)

        if before.active and not updated.active:
            ensure_can_deactivate(updated, await self._account_balance(updated, accounts))

        await self.store.update_account(updated)
        await self.store.record_audit(AuditEvent.create(
            entity=EntityKind.ACCOUNT.value,
            entity_id=account_id,
            action=AuditAction.UPDATE.value,
            user=acting_user,
            before=before.to_dict(),
            after=updated.to_dict(),
        ))

        logger.info(f"계정 수정: {updated.label}", extra={"user": acting_user})
        return updated

    async def deactivate_account(self, account_id: str, acting_user: str) -> Account:
        """계정 비활성화 (물리 삭제 없음)

        Raises:
            NotFoundError: 계정 없음
            AccountError: 잔액이 0보다 큰 계정
        """
        before = await self._get_account_or_raise(account_id)
        accounts = await self.store.get_accounts()
        ensure_can_deactivate(before, await self._account_balance(before, accounts))

        updated = replace(before, active=False)
        await self.store.update_account(updated)
        await self.store.record_audit(AuditEvent.create(
            entity=EntityKind.ACCOUNT.value,
            entity_id=account_id,
            action=AuditAction.DEACTIVATE.value,
            user=acting_user,
            before=before.to_dict(),
            after=updated.to_dict(),
        ))

        logger.info(f"계정 비활성화: {updated.label}", extra={"user": acting_user})
        return updated

    async def list_accounts(self, active_only: bool = False) -> list[Account]:
        """계정 목록"""
        return await self.store.get_accounts(active_only=active_only)

    async def get_account(self, account_id: str) -> Account:
        """계정 조회

        Raises:
            NotFoundError: 계정 없음
        """
        return await self._get_account_or_raise(account_id)

    async def _get_account_or_raise(self, account_id: str) -> Account:
        account = await self.store.get_account(account_id)
        if account is None:
            raise NotFoundError(f"Account {account_id} not found")
        return account

    async def _account_balance(self, account: Account, accounts: list[Account]) -> Money:
        lines = await self.store.get_ledger_lines(account_id=account.id)
        snapshots = compute_balances(accounts, lines)
        return ending_balance(snapshots, account.id)

    async def _check_account_form(self, account: Account, acting_user: str) -> None:
        try:
            validate_account_form(account)
        except AccountError as e:
            await self.store.record_error(
                ErrorEvent.create(user=acting_user, message=str(e), context=ErrorContexts.ACCOUNT_FORM)
            )
            raise

    # =========================================================================
    # 잔액 / 보고서
    # =========================================================================

    async def get_balances(self, from_: Any = None, to: Any = None) -> dict[str, BalanceSnapshot]:
        """계정별 잔액 (기간 포함, 비활성 계정 포함)"""
        accounts = await self.store.get_accounts()
        lines = await self.store.get_ledger_lines()
        return compute_balances(accounts, lines, from_, to)

    async def get_trial_balance(self, from_: Any = None, to: Any = None) -> TrialBalance:
        """시산표"""
        return trial_balance(await self.get_balances(from_, to))

    async def get_income_statement(self, from_: Any = None, to: Any = None) -> IncomeStatement:
        """손익계산서"""
        return income_statement(await self.get_balances(from_, to))

    async def get_balance_sheet(self, from_: Any = None, to: Any = None) -> BalanceSheet:
        """재무상태표 (이익잉여금 = 기초 + 기간 순이익)"""
        snapshots = await self.get_balances(from_, to)
        net_income = income_statement(snapshots).net_income
        return balance_sheet(
            snapshots,
            retained_earnings_opening=self.retained_earnings_opening,
            period_net_income=net_income,
        )

    async def get_retained_earnings_statement(
        self,
        from_: Any = None,
        to: Any = None,
        dividends: Money | None = None,
    ) -> RetainedEarningsStatement:
        """이익잉여금 계산서"""
        net_income = (await self.get_income_statement(from_, to)).net_income
        return retained_earnings_statement(
            self.retained_earnings_opening,
            net_income,
            dividends=dividends,
        )

    async def get_account_ledger(
        self,
        account_id: str,
        from_: Any = None,
        to: Any = None,
        search: str | None = None,
    ) -> list[RunningBalanceRow]:
        """계정 원장 (라인별 누적 잔액)

        Raises:
            NotFoundError: 계정 없음
        """
        account = await self._get_account_or_raise(account_id)
        lines = await self.store.get_ledger_lines(account_id=account_id)
        return running_balances(account, lines, from_, to, search)
