"""
Manifest loaders: 텍스트/XML → ChecksumManifest

loader는 add_checksum만 사용하며 중복 제거하지 않는다.
"""

import logging
from pathlib import Path

from manifest_audit.config import AuditConfig
from manifest_audit.core.logging import emit_warning
from manifest_audit.core.manifest import ChecksumManifest
from manifest_audit.domain.errors import AuditError, ErrorCodes, WarningCodes
from manifest_audit.domain.schemas import RunLog

from .text import parse_text_checksums
from .xml_report import parse_xml_checksums

logger = logging.getLogger(__name__)


def load_manifest(
    path: Path,
    config: AuditConfig | None = None,
    run_log: RunLog | None = None,
) -> ChecksumManifest:
    """
    manifest 파일 로드.

    .xml 확장자(대소문자 무시)는 XML loader, 그 외는 텍스트 loader.

    Args:
        path: manifest 파일 경로
        config: 감사 설정 (None이면 기본값)
        run_log: 파일명 없는 항목을 경고로 기록할 RunLog (선택)

    Returns:
        label이 파일명인 ChecksumManifest

    Raises:
        AuditError: MANIFEST_NOT_FOUND, MANIFEST_PARSE_FAILED, MANIFEST_LINE_INVALID,
            CONFIG_INVALID (알 수 없는 인코딩)
    """
    config = config or AuditConfig()
    path = Path(path)
    if not path.is_file():
        raise AuditError(ErrorCodes.MANIFEST_NOT_FOUND, path=str(path))

    manifest = ChecksumManifest(label=path.name)

    try:
        if path.suffix.lower() == ".xml":
            with open(path, "rb") as f:
                pairs = list(parse_xml_checksums(f, config.xml.digest_prefix))
        else:
            with open(path, encoding=config.text.encoding) as f:
                pairs = list(
                    parse_text_checksums(
                        f,
                        checksum_column=config.text.checksum_column,
                        delimiter=config.text.delimiter,
                        upper_case=config.text.upper_case,
                        source=str(path),
                    )
                )
    except UnicodeDecodeError as e:
        raise AuditError(
            ErrorCodes.MANIFEST_PARSE_FAILED, source=str(path), cause=e
        ) from e
    except LookupError as e:
        raise AuditError(
            ErrorCodes.CONFIG_INVALID,
            key="loaders.text.encoding",
            value=config.text.encoding,
            cause=e,
        ) from e
    except OSError as e:
        raise AuditError(
            ErrorCodes.MANIFEST_PARSE_FAILED,
            source=str(path),
            reason="read failed",
            cause=e,
        ) from e

    for checksum, file_ref in pairs:
        manifest.add_checksum(checksum, file_ref)
        if file_ref is None and run_log is not None:
            emit_warning(
                run_log,
                code=WarningCodes.FILENAME_MISSING,
                source=str(path),
                checksum=checksum,
                message="checksum entry without filename",
            )

    logger.info(
        f"Loaded {path.name}: {len(manifest)} checksums, "
        f"{manifest.entry_count()} entries"
    )
    return manifest


__all__ = [
    "load_manifest",
    "parse_text_checksums",
    "parse_xml_checksums",
]
