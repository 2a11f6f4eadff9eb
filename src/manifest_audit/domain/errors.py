"""
Error definitions for manifest auditing.

규칙:
- 조용한 실패 금지 → AuditError로 명시적 실패
- 알 수 없는 알고리즘 → 설정 오류로 즉시 실패
- 스트림 읽기 실패 → 해당 입력만 실패, 부분 결과 없음
"""

from typing import Any


class AuditError(Exception):
    """
    감사(audit) 처리 중 발생하는 에러.

    - 알 수 없는 digest 알고리즘 (설정 오류)
    - 스트림 읽기 실패 (입력 단위 실패)
    - manifest 파일 누락/파싱 실패
    - 리포트 쓰기 실패

    Usage:
        raise AuditError("STREAM_READ_FAILED", path=str(path), cause=e)
    """

    def __init__(self, code: str, **context: Any) -> None:
        self.code = code
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            **{k: str(v) if isinstance(v, BaseException) else v
               for k, v in self.context.items()},
        }


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Digest ===
    UNKNOWN_ALGORITHM = "UNKNOWN_ALGORITHM"
    STREAM_READ_FAILED = "STREAM_READ_FAILED"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"

    # === Manifest loading ===
    MANIFEST_NOT_FOUND = "MANIFEST_NOT_FOUND"
    MANIFEST_PARSE_FAILED = "MANIFEST_PARSE_FAILED"
    MANIFEST_LINE_INVALID = "MANIFEST_LINE_INVALID"

    # === Report ===
    REPORT_WRITE_FAILED = "REPORT_WRITE_FAILED"

    # === Config ===
    CONFIG_INVALID = "CONFIG_INVALID"


# =============================================================================
# Warning Codes (run log 기록용, 실패 아님)
# =============================================================================

class WarningCodes:
    """경고 코드 상수."""

    FILENAME_MISSING = "FILENAME_MISSING"  # 파일명 없는 checksum 항목
    DIGEST_SKIPPED = "DIGEST_SKIPPED"  # 배치 중 읽기 실패로 건너뜀
