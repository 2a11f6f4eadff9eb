"""
텍스트 manifest loader: "checksum,filename" 줄 단위.

- 빈 줄은 건너뜀
- 앞뒤 공백 제거
- 파일명이 비어 있으면 None (파일명 없음)
- checksum_column=0이면 파일명 열에 구분자가 더 있어도 그대로 유지
"""

import logging
from collections.abc import Iterable, Iterator

from manifest_audit.core.manifest import FileRef
from manifest_audit.domain.constants import TEXT_DELIMITER
from manifest_audit.domain.errors import AuditError, ErrorCodes

logger = logging.getLogger(__name__)


def parse_text_checksums(
    lines: Iterable[str],
    checksum_column: int = 0,
    delimiter: str = TEXT_DELIMITER,
    upper_case: bool = False,
    source: str = "<text>",
) -> Iterator[tuple[str, FileRef]]:
    """
    텍스트 줄에서 (checksum, 파일 참조) 추출.

    Args:
        lines: 입력 줄
        checksum_column: checksum 열 위치 (0 또는 1)
        delimiter: 열 구분자
        upper_case: checksum 대문자 변환 여부
        source: 에러 메시지용 입력 이름

    Yields:
        (checksum, 파일 참조)

    Raises:
        AuditError: MANIFEST_LINE_INVALID (구분자 없음, checksum 비어 있음)
    """
    for line_no, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            continue

        if delimiter not in line:
            raise AuditError(
                ErrorCodes.MANIFEST_LINE_INVALID,
                source=source,
                line=line_no,
                content=line,
            )

        if checksum_column == 0:
            checksum, name = line.split(delimiter, 1)
        else:
            name, checksum = line.rsplit(delimiter, 1)

        checksum = checksum.strip()
        name = name.strip()
        if not checksum:
            raise AuditError(
                ErrorCodes.MANIFEST_LINE_INVALID,
                source=source,
                line=line_no,
                reason="empty checksum",
            )

        if upper_case:
            checksum = checksum.upper()

        yield checksum, (name or None)
