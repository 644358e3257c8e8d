"""
Idempotency 유틸리티

원장 라인 멱등성 키 생성 및 파싱 기능 제공
규칙: {journal_id}:{line_index}
"""

# journal_id와 line_index 구분자
POSTING_KEY_SEPARATOR: str = ":"


def make_posting_key(journal_id: str, line_index: int) -> str:
    """결정적 원장 라인 키 생성

    Args:
        journal_id: 분개 ID
        line_index: 분개 내 라인 순번 (0부터)

    Returns:
        posting_key: {journal_id}:{line_index} 형식

    Example:
        >>> make_posting_key("je-001", 2)
        'je-001:2'
    """
    if not journal_id:
        raise ValueError("journal_id는 비어 있을 수 없습니다")
    if line_index < 0:
        raise ValueError("line_index는 0 이상이어야 합니다")

    return f"{journal_id}{POSTING_KEY_SEPARATOR}{line_index}"


def parse_posting_key(posting_key: str) -> tuple[str, int] | None:
    """posting_key에서 (journal_id, line_index) 추출

    journal_id에 구분자가 포함될 수 있으므로 마지막 구분자 기준으로 분리.

    Args:
        posting_key: {journal_id}:{line_index} 형식의 문자열

    Returns:
        (journal_id, line_index) 또는 None (형식 불일치 시)

    Example:
        >>> parse_posting_key("je-001:2")
        ('je-001', 2)
        >>> parse_posting_key("je-001")
        None
    """
    if not posting_key:
        return None

    journal_id, sep, index_text = posting_key.rpartition(POSTING_KEY_SEPARATOR)
    if not sep or not journal_id or not index_text.isdigit():
        return None

    return journal_id, int(index_text)
