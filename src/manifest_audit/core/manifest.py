"""
ChecksumManifest: checksum → 파일 참조 목록.

규칙:
- add_checksum은 항상 append (중복 제거/정규화 없음)
- checksum 하나를 N개 파일이 공유하면 bucket 크기는 N
- bucket 내부 순서 = 삽입 순서 (reconcile 동점 처리의 유일한 기준)
- 파일 참조가 None이면 "이름 없음" 표시. 오류가 아니라 유효한 데이터.
"""

import re
from collections.abc import Iterable, Iterator, MutableMapping
from dataclasses import dataclass, field
from typing import Any

# None = 파일명 없음
FileRef = str | None

Bucket = list[FileRef]

_SEPARATORS = re.compile(r"[\\/]")


# =============================================================================
# File Reference Identity
# =============================================================================


def basename_key(ref: FileRef) -> str | None:
    """
    매칭용 파일 식별자.

    경로의 마지막 구성요소를 대소문자 무시 비교용으로 변환.
    "/"와 "\\" 모두 구분자로 취급 (서로 다른 OS에서 만든 목록 비교).

    Args:
        ref: 파일 참조

    Returns:
        casefold된 basename, ref가 None이면 None
    """
    if ref is None:
        return None
    stripped = ref.rstrip("/\\")
    name = _SEPARATORS.split(stripped)[-1] if stripped else ref
    return name.casefold()


def references_match(a: FileRef, b: FileRef) -> bool:
    """
    두 파일 참조가 같은 파일을 가리키는지.

    - 둘 다 None → 일치 (이름 없는 항목끼리는 상쇄)
    - 한쪽만 None → 불일치
    - 그 외 → basename 대소문자 무시 비교
    """
    if a is None or b is None:
        return a is None and b is None
    return basename_key(a) == basename_key(b)


# =============================================================================
# Manifest
# =============================================================================


@dataclass(eq=False)
class ChecksumManifest(MutableMapping[str, Bucket]):
    """
    checksum → 파일 참조 bucket의 순서 있는 매핑.

    loader는 add_checksum만 사용해서 채운다. reconcile 후 남은 내용이
    그대로 차이 결과가 된다.

    Usage:
        manifest = ChecksumManifest(label="source")
        manifest.add_checksum("DEADBEEF", "a/test.txt")
        manifest["DEADBEEF"]  # ["a/test.txt"]
    """
    label: str = ""
    entries: dict[str, Bucket] = field(default_factory=dict)

    def add_checksum(self, checksum: str, file_ref: FileRef) -> None:
        """기존 bucket에 append, 없으면 새 bucket 생성."""
        bucket = self.entries.get(checksum)
        if bucket is None:
            self.entries[checksum] = [file_ref]
        else:
            bucket.append(file_ref)

    # === Mapping protocol ===

    def __getitem__(self, checksum: str) -> Bucket:
        return self.entries[checksum]

    def __setitem__(self, checksum: str, bucket: Bucket) -> None:
        self.entries[checksum] = bucket

    def __delitem__(self, checksum: str) -> None:
        del self.entries[checksum]

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        """서로 다른 checksum 수."""
        return len(self.entries)

    def __contains__(self, checksum: object) -> bool:
        return checksum in self.entries

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ChecksumManifest):
            return self.entries == other.entries
        if isinstance(other, dict):
            return self.entries == other
        return NotImplemented

    # === Helpers ===

    def entry_count(self) -> int:
        """전체 파일 참조 수 (중복 포함)."""
        return sum(len(bucket) for bucket in self.entries.values())

    def copy(self) -> "ChecksumManifest":
        """bucket까지 복사한 독립 사본."""
        return ChecksumManifest(
            label=self.label,
            entries={k: list(v) for k, v in self.entries.items()},
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON 직렬화용."""
        return {k: list(v) for k, v in self.entries.items()}

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[tuple[str, FileRef]],
        label: str = "",
    ) -> "ChecksumManifest":
        """(checksum, 파일 참조) 쌍에서 add_checksum으로 생성."""
        manifest = cls(label=label)
        for checksum, file_ref in pairs:
            manifest.add_checksum(checksum, file_ref)
        return manifest


def add_checksum(
    checksum: str,
    file_ref: FileRef,
    manifest: MutableMapping[str, Bucket],
) -> None:
    """
    manifest에 checksum 추가.

    ChecksumManifest 외에 일반 dict도 허용.

    Args:
        checksum: checksum 문자열 (호출자가 준 그대로 사용)
        file_ref: 파일 참조 (None = 파일명 없음)
        manifest: 대상 manifest
    """
    if isinstance(manifest, ChecksumManifest):
        manifest.add_checksum(checksum, file_ref)
    elif checksum in manifest:
        manifest[checksum].append(file_ref)
    else:
        manifest[checksum] = [file_ref]
