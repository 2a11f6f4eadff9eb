"""
Domain Constants: 감사 전역 상수.

알고리즘 이름, 버퍼 크기, 기본 loader 설정 등.
"""

# =============================================================================
# Digest Algorithm Names
# =============================================================================
# 결과 dict의 키로 그대로 사용됨 (대문자 hex 값과 함께 리포트에 출력)

CRC32 = "CRC32"
CKSUM = "cksum"
MD5 = "MD5"
SHA1 = "SHA-1"
SHA256 = "SHA-256"

# CRC32는 registry 밖에서 별도로 계산
DEFAULT_ALGORITHMS = (CKSUM, MD5, SHA1, SHA256)

# 표준 이름 → hashlib 이름
HASHLIB_NAMES = {
    MD5: "md5",
    SHA1: "sha1",
    SHA256: "sha256",
}

# =============================================================================
# I/O
# =============================================================================

READ_CHUNK_SIZE = 32768

# =============================================================================
# Manifest Loaders
# =============================================================================

TEXT_DELIMITER = ","
TEXT_ENCODING = "utf-8"
XML_FILE_ELEMENT = "file"
XML_CHECKSUM_ELEMENT = "checksum"
XML_DIGEST_ATTRIBUTE = "digest"
XML_DEFAULT_DIGEST_PREFIX = CKSUM

# =============================================================================
# Report / Run Log
# =============================================================================

REPORT_ENCODING = "utf-8"
RUN_LOG_GLOB = "run_*.json"
