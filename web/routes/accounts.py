"""
계정과목 라우트

계정 등록, 수정, 비활성화, 조회 API
"""

from fastapi import APIRouter, Depends, Query

from core.ledger.accounts import Account
from core.ledger.money import Money
from core.ledger.service import LedgerService
from web.dependencies import get_acting_user, get_service, get_write_service
from web.models.requests import AccountCreateRequest, AccountUpdateRequest
from web.models.responses import AccountResponse

router = APIRouter(prefix="/api/accounts", tags=["Accounts"])


@router.get("", response_model=list[AccountResponse])
async def list_accounts(
    active_only: bool = Query(default=False, description="활성 계정만"),
    service: LedgerService = Depends(get_service),
) -> list[AccountResponse]:
    """계정 목록 조회 (표시 순서, 계정번호 순)"""
    accounts = await service.list_accounts(active_only=active_only)
    return [AccountResponse.from_account(a) for a in accounts]


@router.get("/{account_id}", response_model=AccountResponse)
async def get_account(
    account_id: str,
    service: LedgerService = Depends(get_service),
) -> AccountResponse:
    """계정 단건 조회"""
    account = await service.get_account(account_id)
    return AccountResponse.from_account(account)


@router.post("", response_model=AccountResponse, status_code=201)
async def create_account(
    request: AccountCreateRequest,
    service: LedgerService = Depends(get_write_service),
    acting_user: str = Depends(get_acting_user),
) -> AccountResponse:
    """계정 등록

    **규칙**:
    - 계정명 필수, 계정번호는 숫자만
    - 계정번호 첫 자리: 1=Asset, 2=Liability, 3=Equity, 4=Revenue, 5=Expense
    - 계정명/계정번호 중복 불가 (비활성 계정 포함)
    """
    account = Account(
        id="",
        name=request.name,
        number=request.number,
        category=request.category,
        subcategory=request.subcategory,
        normal_side=request.normal_side,
        initial_balance=Money.parse(request.initial_balance),
        description=request.description,
        statement=request.statement,
        order=request.order,
        comment=request.comment,
    )
    created = await service.create_account(account, acting_user)
    return AccountResponse.from_account(created)


@router.patch("/{account_id}", response_model=AccountResponse)
async def update_account(
    account_id: str,
    request: AccountUpdateRequest,
    service: LedgerService = Depends(get_write_service),
    acting_user: str = Depends(get_acting_user),
) -> AccountResponse:
    """계정 수정 (보낸 필드만 변경)"""
    updated = await service.update_account(account_id, request.changes(), acting_user)
    return AccountResponse.from_account(updated)


@router.post("/{account_id}/deactivate", response_model=AccountResponse)
async def deactivate_account(
    account_id: str,
    service: LedgerService = Depends(get_write_service),
    acting_user: str = Depends(get_acting_user),
) -> AccountResponse:
    """계정 비활성화 (잔액이 0보다 크면 거부)"""
    updated = await service.deactivate_account(account_id, acting_user)
    return AccountResponse.from_account(updated)
