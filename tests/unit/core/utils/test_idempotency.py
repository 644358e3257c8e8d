"""
멱등성 키 유틸리티 테스트
"""

import pytest

from core.utils.idempotency import make_posting_key, parse_posting_key


class TestMakePostingKey:
    """make_posting_key 테스트"""

    def test_format(self) -> None:
        assert make_posting_key("je-001", 0) == "je-001:0"
        assert make_posting_key("je-001", 12) == "je-001:12"

    def test_deterministic(self) -> None:
        assert make_posting_key("abc", 3) == make_posting_key("abc", 3)

    def test_empty_journal_id(self) -> None:
        with pytest.raises(ValueError):
            make_posting_key("", 0)

    def test_negative_index(self) -> None:
        with pytest.raises(ValueError):
            make_posting_key("je-001", -1)


class TestParsePostingKey:
    """parse_posting_key 테스트"""

    def test_parse(self) -> None:
        assert parse_posting_key("je-001:2") == ("je-001", 2)

    def test_journal_id_with_separator(self) -> None:
        """마지막 구분자 기준 분리"""
        assert parse_posting_key("legacy:je:7") == ("legacy:je", 7)

    @pytest.mark.parametrize("value", ["", "je-001", ":1", "je-001:", "je-001:x"])
    def test_invalid(self, value: str) -> None:
        assert parse_posting_key(value) is None
