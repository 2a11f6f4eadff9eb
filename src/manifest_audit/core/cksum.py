"""
POSIX cksum 호환 CRC.

POSIX.1 cksum 정의:
- 다항식 0x04C11DB7, MSB-first, 초기값 0
- 데이터 뒤에 길이(바이트 수)를 LSB부터, 필요한 바이트만큼 이어서 계산
- 마지막에 1의 보수

hashlib 객체와 같은 인터페이스(update/digest/hexdigest/copy)를 제공하여
DigestRegistry에 다른 알고리즘과 동일하게 등록된다.
"""

CKSUM_POLYNOMIAL = 0x04C11DB7
_MASK = 0xFFFFFFFF


def _build_table() -> tuple[int, ...]:
    table = []
    for i in range(256):
        crc = i << 24
        for _ in range(8):
            if crc & 0x80000000:
                crc = ((crc << 1) ^ CKSUM_POLYNOMIAL) & _MASK
            else:
                crc = (crc << 1) & _MASK
        table.append(crc)
    return tuple(table)


_TABLE = _build_table()


def _update_crc(crc: int, data: bytes) -> int:
    table = _TABLE
    for byte in data:
        crc = ((crc << 8) & _MASK) ^ table[((crc >> 24) ^ byte) & 0xFF]
    return crc


def _finalize(crc: int, length: int) -> int:
    # 길이를 LSB부터 0이 될 때까지 투입
    table = _TABLE
    while length:
        crc = ((crc << 8) & _MASK) ^ table[((crc >> 24) ^ length) & 0xFF]
        length >>= 8
    return ~crc & _MASK


class CksumHash:
    """
    cksum digest 객체.

    digest()는 내부 상태를 바꾸지 않으므로 이후 update() 가능.

    Usage:
        h = CksumHash()
        h.update(b"test")
        h.hexdigest()  # "b75d6a42"
    """

    name = "cksum"
    digest_size = 4
    block_size = 1

    def __init__(self, data: bytes = b"") -> None:
        self._crc = 0
        self._length = 0
        if data:
            self.update(data)

    def update(self, data: bytes) -> None:
        self._crc = _update_crc(self._crc, data)
        self._length += len(data)

    def value(self) -> int:
        """cksum 유틸리티가 출력하는 부호 없는 32비트 값."""
        return _finalize(self._crc, self._length)

    def digest(self) -> bytes:
        return self.value().to_bytes(4, "big")

    def hexdigest(self) -> str:
        return self.digest().hex()

    def copy(self) -> "CksumHash":
        clone = CksumHash()
        clone._crc = self._crc
        clone._length = self._length
        return clone


def cksum_bytes(data: bytes) -> int:
    """bytes 전체의 cksum 값 (정수)."""
    return CksumHash(data).value()
