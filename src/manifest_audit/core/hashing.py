"""
Digest 계산: 한 번의 스트림 통과로 여러 알고리즘의 fingerprint 생성.

규칙:
- 스트림은 정확히 한 번, 고정 크기 chunk로 EOF(b"")까지 읽는다
- 알고리즘마다 DigestReader 한 겹씩 감싼 체인을 만들고 가장 바깥을 읽는다
- CRC32는 registry 밖에서 가장 바깥 chunk로 갱신 (zlib.crc32)
- 결과: 알고리즘 이름 → 대문자 hex, 구분자/접두사 없음
- 읽기 실패 → AuditError(STREAM_READ_FAILED), 부분 결과 없음

참고:
- "현재 읽을 수 있는 바이트"만큼만 읽고 멈추는 방식은 EOF 전에 0을
  보고하는 스트림에서 덜 읽는 문제가 있어 사용하지 않는다.
"""

import logging
import zlib
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any, Protocol

from manifest_audit.core.logging import emit_warning
from manifest_audit.core.registry import DigestRegistry, build_default_registry
from manifest_audit.domain.constants import (
    CRC32,
    DEFAULT_ALGORITHMS,
    READ_CHUNK_SIZE,
)
from manifest_audit.domain.errors import AuditError, ErrorCodes, WarningCodes
from manifest_audit.domain.schemas import (
    BatchDigestResult,
    DigestFailure,
    DigestResult,
    RunLog,
)

logger = logging.getLogger(__name__)

# 배치 처리 중 해당 입력만 실패로 처리하는 코드
_PER_INPUT_FAILURES = {ErrorCodes.STREAM_READ_FAILED, ErrorCodes.FILE_NOT_FOUND}


class Readable(Protocol):
    def read(self, size: int = -1, /) -> bytes | None: ...


# =============================================================================
# Stream Chain
# =============================================================================


class DigestReader:
    """
    읽은 바이트를 자신의 hash에 넣고 그대로 돌려주는 스트림 래퍼.

    여러 겹으로 쌓으면 가장 바깥을 한 번 읽는 것으로 모든 알고리즘이
    같은 바이트를 같은 순서로 한 번씩 본다.
    """

    def __init__(self, stream: Readable, hasher: Any) -> None:
        self._stream = stream
        self.hasher = hasher

    def read(self, size: int = -1, /) -> bytes | None:
        data = self._stream.read(size)
        if data:
            self.hasher.update(data)
        return data

    def hexdigest(self) -> str:
        return self.hasher.hexdigest()


def _describe(stream: Any) -> str:
    return str(getattr(stream, "name", type(stream).__name__))


# =============================================================================
# Engine
# =============================================================================


class DigestEngine:
    """
    설정된 알고리즘 집합을 한 번의 통과로 계산.

    Usage:
        engine = DigestEngine()
        with open(path, "rb") as f:
            digests = engine.compute_digests(f)
        digests["cksum"]  # "B75D6A42"
    """

    def __init__(
        self,
        algorithms: Sequence[str] = DEFAULT_ALGORITHMS,
        registry: DigestRegistry | None = None,
        chunk_size: int = READ_CHUNK_SIZE,
        include_crc32: bool = True,
    ) -> None:
        """
        Args:
            algorithms: registry에 등록된 알고리즘 이름 (순서 = 체인 순서)
            registry: 사용할 레지스트리 (None이면 기본 레지스트리 생성)
            chunk_size: 한 번에 읽을 바이트 수
            include_crc32: CRC32 포함 여부 (algorithms에 "CRC32"가 있어도 포함)

        Raises:
            AuditError: 등록되지 않은 알고리즘 또는 잘못된 chunk_size
        """
        self.registry = registry if registry is not None else build_default_registry()

        names = [name for name in algorithms if name != CRC32]
        self.include_crc32 = include_crc32 or CRC32 in algorithms

        # 설정 오류는 계산 전에 즉시 실패
        for name in names:
            if name not in self.registry:
                raise AuditError(
                    ErrorCodes.UNKNOWN_ALGORITHM,
                    algorithm=name,
                    available=self.registry.names(),
                )
        if chunk_size <= 0:
            raise AuditError(ErrorCodes.CONFIG_INVALID, chunk_size=chunk_size)

        self.algorithms = tuple(names)
        self.chunk_size = chunk_size

    def compute_digests(self, stream: Readable) -> DigestResult:
        """
        스트림 전체의 digest 계산.

        스트림을 닫지 않는다 (호출자 소유).

        Args:
            stream: 바이너리 스트림

        Returns:
            {알고리즘 이름: 대문자 hex}. CRC32가 있으면 맨 앞.

        Raises:
            AuditError: STREAM_READ_FAILED (부분 결과 없음)
        """
        readers: list[tuple[str, DigestReader]] = []
        top: Readable = stream
        for name in self.algorithms:
            reader = DigestReader(top, self.registry.create(name))
            readers.append((name, reader))
            top = reader

        crc = 0
        try:
            while True:
                chunk = top.read(self.chunk_size)
                if chunk is None:
                    # non-blocking 스트림: 데이터 없음을 EOF로 오인하지 않음
                    raise AuditError(
                        ErrorCodes.STREAM_READ_FAILED,
                        stream=_describe(stream),
                        reason="stream returned no data before EOF",
                    )
                if not chunk:
                    break
                if self.include_crc32:
                    crc = zlib.crc32(chunk, crc)
        except (OSError, ValueError) as e:
            # ValueError: 읽는 도중 스트림이 닫힌 경우
            raise AuditError(
                ErrorCodes.STREAM_READ_FAILED,
                stream=_describe(stream),
                cause=e,
            ) from e

        result: DigestResult = {}
        if self.include_crc32:
            result[CRC32] = format(crc, "X")
        for name, reader in readers:
            result[name] = reader.hexdigest().upper()
        return result

    def compute_file_digests(self, path: Path | str) -> DigestResult:
        """
        파일 digest 계산.

        Raises:
            AuditError: FILE_NOT_FOUND, STREAM_READ_FAILED
        """
        file_path = Path(path)
        try:
            f = open(file_path, "rb")
        except FileNotFoundError as e:
            raise AuditError(ErrorCodes.FILE_NOT_FOUND, path=str(file_path)) from e
        except OSError as e:
            raise AuditError(
                ErrorCodes.STREAM_READ_FAILED, path=str(file_path), cause=e
            ) from e

        with f:
            return self.compute_digests(f)


# =============================================================================
# Helpers
# =============================================================================


def digest_files(
    paths: Iterable[Path | str],
    engine: DigestEngine | None = None,
    run_log: RunLog | None = None,
) -> BatchDigestResult:
    """
    여러 파일 digest 계산.

    읽기 실패한 파일은 failures에 기록하고 나머지를 계속 처리한다.
    설정 오류 등 다른 에러는 그대로 전파.

    Args:
        paths: 파일 경로 목록
        engine: 사용할 엔진 (None이면 기본 엔진)
        run_log: 경고를 기록할 RunLog (선택)

    Returns:
        BatchDigestResult
    """
    engine = engine or DigestEngine()
    batch = BatchDigestResult()

    for path in paths:
        file_path = Path(path)
        try:
            batch.results[file_path] = engine.compute_file_digests(file_path)
        except AuditError as e:
            if e.code not in _PER_INPUT_FAILURES:
                raise
            logger.error(f"Digest failed for {file_path}: {e}")
            batch.failures.append(
                DigestFailure(path=file_path, code=e.code, message=str(e))
            )
            if run_log is not None:
                emit_warning(
                    run_log,
                    code=WarningCodes.DIGEST_SKIPPED,
                    source=str(file_path),
                    message=str(e),
                )

    logger.info(
        f"Digested {len(batch.results)} files, {len(batch.failures)} failed"
    )
    return batch


def generate_checksum(
    path: Path | str,
    algorithm: str = "MD5",
    registry: DigestRegistry | None = None,
    with_prefix: bool = False,
) -> str:
    """
    단일 알고리즘 파일 checksum.

    Args:
        path: 파일 경로
        algorithm: 알고리즘 이름 (기본: MD5)
        registry: 사용할 레지스트리
        with_prefix: True면 "MD5:<hex>" 형식

    Returns:
        소문자 hex 문자열
    """
    engine = DigestEngine(
        algorithms=(algorithm,), registry=registry, include_crc32=False
    )
    value = engine.compute_file_digests(path)[algorithm].lower()
    return f"{algorithm}:{value}" if with_prefix else value
