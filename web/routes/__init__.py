"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- accounts: 계정과목 관리
- journal: 분개 제출/승인/반려, 알림함
- ledger: 계정 원장 (누적 잔액)
- reports: 재무제표
"""
