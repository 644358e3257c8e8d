"""
요청 스키마 (Pydantic)

Web API 요청 데이터 검증

금액은 "1,234.50" 같은 문자열 또는 숫자 모두 허용하고
Money.parse()로 변환 (파싱 경계는 한 곳).
"""

from typing import Any

from pydantic import BaseModel, Field


class AccountCreateRequest(BaseModel):
    """계정 등록 요청"""

    name: str = Field(..., description="계정명")
    number: str = Field(..., description="계정번호 (숫자만, 분류별 접두사)")
    category: str = Field(..., description="계정 분류 (Asset/Liability/Equity/Revenue/Expense)")
    subcategory: str = Field(default="", description="세부 분류")
    normal_side: str | None = Field(default=None, description="정상 잔액 방향 (Debit/Credit)")
    initial_balance: str | float | int = Field(default="0.00", description="기초 잔액")
    description: str = Field(default="", description="설명")
    statement: str = Field(default="BS", description="표시 보고서 (BS/IS/RE)")
    order: str = Field(default="01", description="표시 순서")
    comment: str = Field(default="", description="비고")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Petty Cash",
                    "number": "102",
                    "category": "Asset",
                    "subcategory": "Current Assets",
                    "initial_balance": "250.00",
                },
            ]
        }
    }


class AccountUpdateRequest(BaseModel):
    """계정 수정 요청 (보낸 필드만 변경)"""

    name: str | None = Field(default=None, description="계정명")
    number: str | None = Field(default=None, description="계정번호")
    category: str | None = Field(default=None, description="계정 분류")
    subcategory: str | None = Field(default=None, description="세부 분류")
    normal_side: str | None = Field(default=None, description="정상 잔액 방향")
    initial_balance: str | float | int | None = Field(default=None, description="기초 잔액")
    active: bool | None = Field(default=None, description="활성 여부")
    description: str | None = Field(default=None, description="설명")
    statement: str | None = Field(default=None, description="표시 보고서")
    order: str | None = Field(default=None, description="표시 순서")
    comment: str | None = Field(default=None, description="비고")

    def changes(self) -> dict[str, Any]:
        """명시적으로 전달된 필드만 반환"""
        return self.model_dump(exclude_unset=True)


class JournalLineRequest(BaseModel):
    """분개 라인"""

    account_id: str | None = Field(default=None, description="계정 ID")
    amount: str | float | int = Field(..., description="금액 (양수)")
    side: str = Field(..., description="debit 또는 credit")


class JournalEntryCreateRequest(BaseModel):
    """분개 제출 요청"""

    date: str | None = Field(default=None, description="분개 일자 (YYYY-MM-DD, 생략 시 오늘)")
    description: str = Field(default="", description="적요")
    lines: list[JournalLineRequest] = Field(default_factory=list, description="분개 라인")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "date": "2026-03-01",
                    "description": "Office rent for March",
                    "lines": [
                        {"account_id": "acc-501", "amount": "1,200.00", "side": "debit"},
                        {"account_id": "acc-101", "amount": "1,200.00", "side": "credit"},
                    ],
                },
            ]
        }
    }


class JournalRejectRequest(BaseModel):
    """분개 반려 요청"""

    reason: str | None = Field(default=None, description="반려 사유")
