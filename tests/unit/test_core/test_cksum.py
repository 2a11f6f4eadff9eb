"""
test_cksum.py - POSIX cksum 호환성 테스트

DoD:
- 빈 입력 → FFFFFFFF
- "test" → B75D6A42 (cksum 유틸리티 기준값)
- 분할 update 결과 = 한 번에 update 결과
- digest()가 상태를 바꾸지 않음
"""

import pytest

from manifest_audit.core.cksum import CksumHash, cksum_bytes

# =============================================================================
# 기준값 테스트
# =============================================================================

class TestReferenceValues:
    """cksum 유틸리티 출력과 일치하는지."""

    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            (b"", 4294967295),
            (b"test", 3076352578),
            (b"123456789", 930766865),
            (b"abc", 1219131554),
            (b"hello\n", 3015617425),
        ],
    )
    def test_matches_cksum_utility(self, data: bytes, expected: int):
        """cksum 유틸리티가 출력하는 10진수 값과 일치."""
        assert cksum_bytes(data) == expected

    def test_empty_hexdigest(self):
        """빈 입력 hex = ffffffff."""
        assert CksumHash().hexdigest() == "ffffffff"

    def test_test_hexdigest(self):
        """"test" hex = b75d6a42."""
        assert CksumHash(b"test").hexdigest() == "b75d6a42"

    def test_length_longer_than_one_byte(self):
        """길이가 255바이트를 넘으면 길이 바이트가 여러 개 투입됨."""
        short = cksum_bytes(b"\x00" * 255)
        longer = cksum_bytes(b"\x00" * 256)

        # 0 바이트만으로는 CRC가 변하지 않으므로 길이 반영 여부로만 차이남
        assert short != longer


# =============================================================================
# hashlib 호환 인터페이스
# =============================================================================

class TestHashInterface:
    """hashlib 객체처럼 동작하는지."""

    def test_attributes(self):
        """name, digest_size."""
        h = CksumHash()

        assert h.name == "cksum"
        assert h.digest_size == 4
        assert len(h.digest()) == 4

    def test_digest_big_endian(self):
        """digest()는 big-endian 4바이트."""
        assert CksumHash(b"test").digest() == bytes.fromhex("b75d6a42")

    def test_incremental_update(self):
        """나눠서 update해도 결과 동일."""
        h = CksumHash()
        h.update(b"12345")
        h.update(b"")
        h.update(b"6789")

        assert h.value() == cksum_bytes(b"123456789")

    def test_digest_does_not_mutate(self):
        """digest() 후 update 가능."""
        h = CksumHash(b"te")
        h.digest()
        h.update(b"st")

        assert h.hexdigest() == "b75d6a42"

    def test_copy_independent(self):
        """copy()는 독립 상태."""
        h = CksumHash(b"te")
        clone = h.copy()
        clone.update(b"st")

        assert clone.hexdigest() == "b75d6a42"
        assert h.value() == cksum_bytes(b"te")
