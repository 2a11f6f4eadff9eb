"""
XML 리포트 manifest loader.

형식 (형제 요소):
    <file>path/to/name.txt</file>
    <checksum digest="cksum">3076352578</checksum>
    <checksum digest="MD5">...</checksum>

- <file>이 현재 파일명을 설정
- digest 속성이 prefix로 시작하는 <checksum>만 추출, 추출 후 현재 파일명 초기화
- 새 <file> 없이 다시 일치하는 <checksum>이 오면 파일명 None으로 추출 (경고)
- digest 속성 없는 <checksum>은 무시
"""

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

from manifest_audit.core.manifest import FileRef
from manifest_audit.domain.constants import (
    XML_CHECKSUM_ELEMENT,
    XML_DEFAULT_DIGEST_PREFIX,
    XML_DIGEST_ATTRIBUTE,
    XML_FILE_ELEMENT,
)
from manifest_audit.domain.errors import AuditError, ErrorCodes

logger = logging.getLogger(__name__)


def _local_name(tag: str) -> str:
    # {namespace}name → name
    return tag.rsplit("}", 1)[-1]


def parse_xml_checksums(
    source: Path | str | BinaryIO,
    digest_prefix: str = XML_DEFAULT_DIGEST_PREFIX,
) -> Iterator[tuple[str, FileRef]]:
    """
    XML 리포트에서 (checksum, 파일 참조) 추출.

    Args:
        source: 파일 경로 또는 바이너리 스트림
        digest_prefix: 추출할 digest 속성 prefix

    Yields:
        (checksum, 파일 참조)

    Raises:
        AuditError: MANIFEST_PARSE_FAILED
    """
    current: FileRef = None
    root = None
    depth = 0

    try:
        for event, elem in ET.iterparse(source, events=("start", "end")):
            if event == "start":
                if root is None:
                    root = elem
                depth += 1
                continue

            depth -= 1
            name = _local_name(elem.tag)

            if name == XML_FILE_ELEMENT:
                current = (elem.text or "").strip() or None

            elif name == XML_CHECKSUM_ELEMENT:
                digest = elem.get(XML_DIGEST_ATTRIBUTE)
                if digest is not None and digest.startswith(digest_prefix):
                    checksum = (elem.text or "").strip()
                    if current is None:
                        logger.warning(
                            f"Checksum {checksum} has no filename in {source}"
                        )
                    yield checksum, current
                    current = None

            # 처리한 요소는 비우고, 루트 직계 자식이 끝나면 루트에서 떼어낸다
            elem.clear()
            if depth == 1:
                root.clear()
    except ET.ParseError as e:
        raise AuditError(
            ErrorCodes.MANIFEST_PARSE_FAILED,
            source=str(source),
            cause=e,
        ) from e
