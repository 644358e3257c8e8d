"""
계정과목 모델 테스트

정상 잔액 방향, 계정번호 규칙, 중복/비활성화 규칙
"""

import pytest

from core.ledger.accounts import (
    Account,
    accounts_by_id,
    ensure_can_deactivate,
    ensure_unique,
    is_debit_normal,
    is_digits_only,
    number_has_valid_prefix,
    validate_account_form,
)
from core.ledger.errors import AccountError, LedgerError
from core.ledger.money import Money


def _account(**kwargs) -> Account:
    defaults = {"id": "acc-x", "name": "Cash", "number": "101", "category": "Asset"}
    defaults.update(kwargs)
    return Account(**defaults)


class TestIsDebitNormal:
    """정상 잔액 방향 테스트"""

    @pytest.mark.parametrize(
        "category, expected",
        [
            ("Asset", True),
            ("Expense", True),
            ("Liability", False),
            ("Equity", False),
            ("Revenue", False),
        ],
    )
    def test_derived_from_category(self, category: str, expected: bool) -> None:
        """normal_side 미지정 시 분류로 판정"""
        assert is_debit_normal(_account(category=category)) is expected

    def test_explicit_normal_side_wins(self) -> None:
        """명시된 normal_side 우선 (대손충당금 같은 차감 계정)"""
        contra_asset = _account(category="Asset", normal_side="Credit")
        assert is_debit_normal(contra_asset) is False

        drawing = _account(category="Equity", normal_side="Debit")
        assert is_debit_normal(drawing) is True

    def test_normal_side_case_insensitive(self) -> None:
        """대소문자 무시"""
        assert is_debit_normal(_account(category="Revenue", normal_side="debit")) is True

    def test_unknown_category_is_credit_normal(self) -> None:
        """알 수 없는 분류는 대변 정상"""
        assert is_debit_normal(_account(category="Other")) is False


class TestAccountNumberRules:
    """계정번호 규칙 테스트"""

    @pytest.mark.parametrize("value", ["101", "0", "500123"])
    def test_digits_only_accepts(self, value: str) -> None:
        assert is_digits_only(value)

    @pytest.mark.parametrize("value", ["", "1e3", "-101", "+101", "10 1", "101a", "1.5"])
    def test_digits_only_rejects(self, value: str) -> None:
        """부호, 지수, 공백, 소수점 거부"""
        assert not is_digits_only(value)

    def test_prefix_matches_category(self) -> None:
        """분류별 접두사"""
        assert number_has_valid_prefix("Asset", "101")
        assert number_has_valid_prefix("Expense", "520")
        assert not number_has_valid_prefix("Liability", "101")

    def test_unknown_category_prefix_not_checked(self) -> None:
        """알 수 없는 분류는 통과"""
        assert number_has_valid_prefix("Other", "999")


class TestValidateAccountForm:
    """계정 입력값 검증 테스트"""

    def test_valid_form(self) -> None:
        validate_account_form(_account())

    def test_name_required(self) -> None:
        with pytest.raises(AccountError, match="Account name is required"):
            validate_account_form(_account(name="   "))

    def test_number_digits_only(self) -> None:
        with pytest.raises(AccountError, match="Account number must be digits only"):
            validate_account_form(_account(number="1e2"))

    def test_number_prefix(self) -> None:
        with pytest.raises(AccountError, match="correct prefix for Revenue"):
            validate_account_form(_account(category="Revenue", number="501"))

    def test_account_error_is_ledger_error(self) -> None:
        assert issubclass(AccountError, LedgerError)


class TestEnsureUnique:
    """중복 검사 테스트"""

    def test_duplicate_name(self, accounts) -> None:
        with pytest.raises(AccountError, match="Duplicate account name"):
            ensure_unique(accounts, "Cash", "102")

    def test_duplicate_number(self, accounts) -> None:
        with pytest.raises(AccountError, match="Duplicate account number"):
            ensure_unique(accounts, "Petty Cash", "101")

    def test_inactive_accounts_count(self, accounts) -> None:
        """비활성 계정도 중복 대상"""
        with pytest.raises(AccountError):
            ensure_unique(accounts, "Supplies", "125")

    def test_exclude_self_on_edit(self, accounts) -> None:
        """수정 중인 계정 자신은 제외"""
        ensure_unique(accounts, "Cash", "101", exclude_id="acc-101")

    def test_unique_passes(self, accounts) -> None:
        ensure_unique(accounts, "Petty Cash", "102")


class TestEnsureCanDeactivate:
    """비활성화 규칙 테스트"""

    def test_positive_balance_blocks(self) -> None:
        with pytest.raises(AccountError, match="101 Cash"):
            ensure_can_deactivate(_account(), Money.parse("0.01"))

    def test_zero_balance_allows(self) -> None:
        ensure_can_deactivate(_account(), Money.zero())

    def test_negative_balance_allows(self) -> None:
        """음수(반대 방향) 잔액은 막지 않음"""
        ensure_can_deactivate(_account(), Money.parse("-5.00"))


class TestAccountSerialization:
    """직렬화 테스트"""

    def test_to_dict_money_as_string(self) -> None:
        data = _account(initial_balance=Money.parse("1,500.25")).to_dict()
        assert data["initial_balance"] == "1500.25"
        assert data["active"] is True

    def test_from_dict_accepts_legacy_keys(self) -> None:
        """구버전 camelCase 키"""
        account = Account.from_dict({
            "id": "abc",
            "name": "Allowance for Doubtful Accounts",
            "number": 115,
            "category": "Asset",
            "normalSide": "Credit",
            "initialBalance": "2,000",
            "active": False,
        })
        assert account.number == "115"
        assert account.normal_side == "Credit"
        assert account.initial_balance == Money.parse("2000")
        assert account.active is False

    def test_from_dict_round_trip(self) -> None:
        original = _account(subcategory="Current Assets", initial_balance=Money(12345))
        assert Account.from_dict(original.to_dict()) == original

    def test_label(self) -> None:
        assert _account().label == "101 Cash"
        assert _account(number="").label == "Cash"

    def test_accounts_by_id(self, accounts) -> None:
        lookup = accounts_by_id(accounts)
        assert lookup["acc-401"].name == "Service Revenue"
