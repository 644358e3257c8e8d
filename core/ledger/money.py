"""
금액 타입

정수 센트(minor unit)로 저장하고 소수점 2자리 Decimal로 노출.
float 누적 오차(penny drift) 방지를 위해 모든 연산은 정수로 수행하고
소수점은 포맷팅 시에만 다시 붙임.

사용 예시:
```python
total = Money.parse("1,234.50") + Money.parse("0.50")
format_money(total)   # "1,235.00"
str(total)            # "1235.00" (저장/API 경계용)
```
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from typing import Any

CENT = Decimal("0.01")
CENTS_PER_UNIT = 100

# 정수부 최대 자릿수 (초과 시 유효하지 않은 금액)
MAX_INTEGER_DIGITS = 15


@dataclass(frozen=True, order=True)
class Money:
    """금액 (불변)

    cents: 센트 단위 정수. 음수 허용 (잔액 계산 결과).
    """

    cents: int = 0

    # -------------------------------------------------------------------------
    # 생성
    # -------------------------------------------------------------------------

    @classmethod
    def zero(cls) -> Money:
        return cls(0)

    @classmethod
    def from_decimal(cls, value: Decimal) -> Money:
        """Decimal → Money (센트 단위 round-half-to-even)

        Raises:
            ValueError: NaN, Infinity 등 유한하지 않은 값, 정수부가 MAX_INTEGER_DIGITS 초과
        """
        if not value.is_finite():
            raise ValueError(f"유한하지 않은 금액입니다: {value}")
        if value.adjusted() >= MAX_INTEGER_DIGITS:
            raise ValueError(f"금액 자릿수 초과: {value}")
        quantized = value.quantize(CENT, rounding=ROUND_HALF_EVEN)
        return cls(int(quantized.scaleb(2)))

    @classmethod
    def parse(cls, value: Any) -> Money:
        """입력값을 Money로 변환

        허용: Money, int, Decimal, float(str 경유), 문자열.
        문자열은 천 단위 구분자(,)와 부호(+/-) 허용.
        빈 값, 해석 불가능한 값, 자릿수 초과 값은 0으로 처리 (예외 없음).
        """
        if value is None or isinstance(value, bool):
            return cls.zero()
        if isinstance(value, Money):
            return value
        if isinstance(value, int):
            if abs(value) >= 10 ** MAX_INTEGER_DIGITS:
                return cls.zero()
            return cls(value * CENTS_PER_UNIT)
        if isinstance(value, Decimal):
            value = str(value)
        if isinstance(value, float):
            # repr 기반 최단 표현을 사용해 이진 부동소수점 오차 제거
            value = repr(value)

        text = str(value).strip().replace(",", "")
        if not text:
            return cls.zero()

        try:
            amount = Decimal(text)
        except InvalidOperation:
            return cls.zero()

        if not amount.is_finite() or amount.adjusted() >= MAX_INTEGER_DIGITS:
            return cls.zero()

        return cls.from_decimal(amount)

    # -------------------------------------------------------------------------
    # 변환
    # -------------------------------------------------------------------------

    @property
    def amount(self) -> Decimal:
        """소수점 2자리 Decimal"""
        return Decimal(self.cents).scaleb(-2).quantize(CENT)

    def __str__(self) -> str:
        """저장/API 경계용 문자열 (구분자 없음, 예: "-1234.50")"""
        return f"{self.amount:.2f}"

    def __repr__(self) -> str:
        return f"Money('{self}')"

    # -------------------------------------------------------------------------
    # 연산 (정수 센트 기준)
    # -------------------------------------------------------------------------

    def __add__(self, other: Any) -> Money:
        if isinstance(other, Money):
            return Money(self.cents + other.cents)
        if other == 0 and not isinstance(other, bool):
            # sum() 시작값 지원
            return self
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other: Any) -> Money:
        if isinstance(other, Money):
            return Money(self.cents - other.cents)
        return NotImplemented

    def __neg__(self) -> Money:
        return Money(-self.cents)

    def __abs__(self) -> Money:
        return Money(abs(self.cents))

    @property
    def is_zero(self) -> bool:
        return self.cents == 0

    @property
    def is_positive(self) -> bool:
        return self.cents > 0

    @property
    def is_negative(self) -> bool:
        return self.cents < 0


def parse_money(value: Any) -> Money:
    """Money.parse 축약형"""
    return Money.parse(value)


def format_money(value: Money) -> str:
    """표시용 포맷 (천 단위 구분자, 소수점 2자리)

    Example:
        >>> format_money(Money(123450))
        '1,234.50'
        >>> format_money(Money(-5))
        '-0.05'
    """
    return f"{value.amount:,.2f}"


def sum_money(values: Any) -> Money:
    """Money 합계 (빈 목록이면 0)"""
    total = Money.zero()
    for value in values:
        total = total + value
    return total
