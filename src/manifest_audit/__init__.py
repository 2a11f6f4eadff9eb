"""
manifest-audit: 서로 다른 도구로 만든 파일 목록(manifest)이 같은 내용 집합을
가리키는지 검증.

- 한 번의 통과로 여러 digest 계산 (POSIX cksum 포함)
- 두 manifest를 reconcile하여 진짜 차이만 남김
"""

__version__ = "0.1.0"
