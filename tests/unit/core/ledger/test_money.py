"""
Money 테스트

파싱 경계, 반올림, 포맷, 정수 센트 연산
"""

from decimal import Decimal

import pytest

from core.ledger.money import Money, format_money, parse_money, sum_money


class TestMoneyParse:
    """Money.parse 테스트"""

    def test_parse_string_with_thousands_separator(self) -> None:
        """천 단위 구분자 허용"""
        assert Money.parse("1,234.50").cents == 123450

    def test_parse_plain_string(self) -> None:
        """일반 문자열"""
        assert Money.parse("99.99").cents == 9999

    def test_parse_int_is_units(self) -> None:
        """정수는 원 단위"""
        assert Money.parse(12).cents == 1200

    def test_parse_float_has_no_binary_error(self) -> None:
        """float는 repr 경유로 이진 오차 없음"""
        assert Money.parse(0.1).cents == 10
        assert Money.parse(19.99).cents == 1999

    def test_parse_decimal(self) -> None:
        """Decimal"""
        assert Money.parse(Decimal("5.25")).cents == 525

    def test_parse_negative(self) -> None:
        """음수 허용 (검증기에서 거부)"""
        assert Money.parse("-20.00").cents == -2000

    @pytest.mark.parametrize("value", [None, "", "   ", "abc", "12.3.4", "NaN", "Infinity", True])
    def test_unparseable_is_zero(self, value) -> None:
        """해석 불가능한 값은 0"""
        assert Money.parse(value).is_zero

    def test_money_passthrough(self) -> None:
        """Money는 그대로 반환"""
        m = Money(500)
        assert Money.parse(m) is m

    def test_round_half_even(self) -> None:
        """센트 미만은 round-half-to-even"""
        assert Money.parse("0.005").cents == 0
        assert Money.parse("0.015").cents == 2
        assert Money.parse("2.675").cents == 268

    def test_from_decimal_rejects_non_finite(self) -> None:
        """from_decimal은 NaN 거부"""
        with pytest.raises(ValueError):
            Money.from_decimal(Decimal("NaN"))

    @pytest.mark.parametrize(
        "value",
        ["1" * 30, "1e999999999", Decimal("1" * 40), 10 ** 20, "1000000000000000.00"],
    )
    def test_oversized_is_zero(self, value) -> None:
        """자릿수 초과 금액은 예외 없이 0"""
        assert Money.parse(value).is_zero

    def test_largest_allowed_amount(self) -> None:
        assert str(Money.parse("999,999,999,999,999.99")) == "999999999999999.99"

    def test_from_decimal_rejects_oversized(self) -> None:
        with pytest.raises(ValueError, match="자릿수 초과"):
            Money.from_decimal(Decimal("1" * 30))

    def test_parse_money_alias(self) -> None:
        """parse_money 축약형"""
        assert parse_money("1,000") == Money(100000)


class TestMoneyFormat:
    """포맷 테스트"""

    def test_str_is_two_decimal_without_separator(self) -> None:
        """저장/API 경계 문자열"""
        assert str(Money(123450)) == "1234.50"
        assert str(Money(-5)) == "-0.05"
        assert str(Money.zero()) == "0.00"

    def test_format_money_with_separator(self) -> None:
        """표시용 포맷"""
        assert format_money(Money(123456789)) == "1,234,567.89"
        assert format_money(Money(-150000)) == "-1,500.00"

    def test_round_trip(self) -> None:
        """format → parse 왕복"""
        for cents in (0, 1, 99, 100000, -123456, 987654321):
            m = Money(cents)
            assert Money.parse(format_money(m)) == m
            assert Money.parse(str(m)) == m

    def test_amount_is_quantized_decimal(self) -> None:
        """amount는 소수점 2자리 Decimal"""
        assert Money(1050).amount == Decimal("10.50")

    def test_repr(self) -> None:
        """repr"""
        assert repr(Money(250)) == "Money('2.50')"


class TestMoneyArithmetic:
    """정수 센트 연산 테스트"""

    def test_no_penny_drift(self) -> None:
        """0.1을 열 번 더해도 정확히 1.00"""
        total = sum_money(Money.parse("0.10") for _ in range(10))
        assert total == Money.parse("1.00")

    def test_builtin_sum(self) -> None:
        """sum() 시작값 0 지원"""
        assert sum([Money(100), Money(250)]) == Money(350)

    def test_sub_neg_abs(self) -> None:
        """뺄셈, 부호, 절대값"""
        m = Money(100) - Money(250)
        assert m == Money(-150)
        assert -m == Money(150)
        assert abs(m) == Money(150)

    def test_ordering(self) -> None:
        """대소 비교"""
        assert Money(100) < Money(101)
        assert max(Money(5), Money(3)) == Money(5)

    def test_sign_properties(self) -> None:
        """부호 속성"""
        assert Money(1).is_positive
        assert Money(-1).is_negative
        assert Money.zero().is_zero

    def test_add_non_money_not_supported(self) -> None:
        """Money가 아닌 값과 더하기 불가 (0 제외)"""
        with pytest.raises(TypeError):
            Money(100) + 5  # noqa: B018

    def test_sum_money_empty(self) -> None:
        """빈 목록 합계는 0"""
        assert sum_money([]) == Money.zero()
