"""
Digest 알고리즘 레지스트리.

규칙:
- 전역 플래그 대신 명시적 레지스트리 값을 만들어 DigestEngine에 전달
- 같은 이름 재등록은 no-op (최초 등록만 유효)
- 알 수 없는 이름 요청 → AuditError(UNKNOWN_ALGORITHM), 조용히 건너뛰지 않음
- CRC32는 레지스트리에 넣지 않음 (엔진이 별도 추적)

동시성:
- 최초 등록은 동기화하지 않음. 워커 생성 전에 한 번 구성할 것.
"""

import functools
import hashlib
import logging
from collections.abc import Callable
from typing import Any

from manifest_audit.core.cksum import CksumHash
from manifest_audit.domain.constants import CKSUM, HASHLIB_NAMES
from manifest_audit.domain.errors import AuditError, ErrorCodes

logger = logging.getLogger(__name__)

# hashlib 호환 객체를 반환하는 팩토리
HashFactory = Callable[[], Any]


class DigestRegistry:
    """
    이름 → hash 팩토리 매핑.

    Usage:
        registry = DigestRegistry()
        registry.register_cksum()
        h = registry.create("cksum")
    """

    def __init__(self) -> None:
        self._factories: dict[str, HashFactory] = {}

    def register(self, name: str, factory: HashFactory) -> bool:
        """
        알고리즘 등록.

        Args:
            name: 결과 dict에 쓰일 알고리즘 이름
            factory: 인자 없이 hash 객체를 반환하는 callable

        Returns:
            최초 등록이면 True, 이미 등록된 이름이면 False (no-op)
        """
        if name in self._factories:
            return False
        self._factories[name] = factory
        logger.debug(f"Registered digest algorithm: {name}")
        return True

    def register_cksum(self) -> bool:
        """cksum 알고리즘을 고정 이름으로 등록 (이후 호출은 no-op)."""
        return self.register(CKSUM, CksumHash)

    def create(self, name: str) -> Any:
        """
        새 hash 객체 생성.

        Raises:
            AuditError: 등록되지 않은 이름
        """
        factory = self._factories.get(name)
        if factory is None:
            raise AuditError(
                ErrorCodes.UNKNOWN_ALGORITHM,
                algorithm=name,
                available=self.names(),
            )
        return factory()

    def names(self) -> list[str]:
        """등록 순서대로 알고리즘 이름 목록."""
        return list(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)


def build_default_registry() -> DigestRegistry:
    """
    표준 알고리즘(MD5, SHA-1, SHA-256) + cksum이 등록된 레지스트리.

    Returns:
        새 DigestRegistry
    """
    registry = DigestRegistry()
    for name, hashlib_name in HASHLIB_NAMES.items():
        registry.register(name, functools.partial(hashlib.new, hashlib_name))
    registry.register_cksum()
    return registry
