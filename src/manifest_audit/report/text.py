"""
잔여 manifest 텍스트 리포트.

형식:
    Unique files in <label>: <서로 다른 checksum 수>
    <checksum>: [<파일>, ...]     (파일명 없음은 null)
"""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

from manifest_audit.core.io import atomic_write_text
from manifest_audit.core.manifest import Bucket, FileRef
from manifest_audit.domain.constants import REPORT_ENCODING
from manifest_audit.domain.errors import AuditError, ErrorCodes

logger = logging.getLogger(__name__)


def format_header(manifest: Mapping[str, Bucket], label: str) -> str:
    """요약 줄."""
    return f"Unique files in {label}: {len(manifest)}"


def _render_ref(ref: FileRef) -> str:
    return "null" if ref is None else ref


def format_entry(checksum: str, bucket: Bucket) -> str:
    """checksum 한 개의 잔여 목록 줄 (경로는 입력 그대로)."""
    return f"{checksum}: [{', '.join(_render_ref(ref) for ref in bucket)}]"


def format_report(manifest: Mapping[str, Bucket], label: str) -> list[str]:
    """
    잔여 manifest 리포트 라인.

    Args:
        manifest: reconcile 후 manifest
        label: 리포트에 표시할 이름

    Returns:
        요약 줄 + checksum별 줄
    """
    lines = [format_header(manifest, label)]
    lines.extend(format_entry(k, v) for k, v in manifest.items())
    return lines


def write_report(path: Path, lines: Iterable[str]) -> Path:
    """
    리포트 파일 쓰기 (원자적).

    Raises:
        AuditError: REPORT_WRITE_FAILED
    """
    text = "".join(f"{line}\n" for line in lines)
    try:
        atomic_write_text(path, text, encoding=REPORT_ENCODING)
    except OSError as e:
        raise AuditError(ErrorCodes.REPORT_WRITE_FAILED, path=str(path), cause=e) from e

    logger.info(f"Report written: {path}")
    return path
