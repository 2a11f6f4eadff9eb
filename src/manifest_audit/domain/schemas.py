"""
Data schemas for manifest auditing.

규칙:
- DigestResult: 알고리즘 이름 → 대문자 hex 문자열 (구분자/접두사 없음)
- 결과 객체는 to_dict()로 JSON 직렬화 가능해야 함
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# 알고리즘 이름 → 대문자 hex digest
DigestResult = dict[str, str]

# =============================================================================
# Digest Schemas
# =============================================================================

@dataclass
class DigestFailure:
    """배치 digest 중 실패한 입력."""
    path: Path
    code: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": str(self.path),
            "code": self.code,
            "message": self.message,
        }


@dataclass
class BatchDigestResult:
    """
    여러 파일 digest 결과.

    실패한 파일은 results에 없고 failures에만 기록됨.
    """
    results: dict[Path, DigestResult] = field(default_factory=dict)
    failures: list[DigestFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def to_dict(self) -> dict[str, Any]:
        return {
            "results": {str(p): dict(d) for p, d in self.results.items()},
            "failures": [f.to_dict() for f in self.failures],
        }


# =============================================================================
# Reconciliation Schemas
# =============================================================================

@dataclass
class ReconcileSummary:
    """
    reconcile() 실행 요약.

    manifest 자체가 결과이며, 이 객체는 카운트만 담는다.
    """
    shared_checksums: int = 0
    matched_entries: int = 0
    residual_checksums_a: int = 0
    residual_checksums_b: int = 0
    residual_entries_a: int = 0
    residual_entries_b: int = 0

    @property
    def identical(self) -> bool:
        """양쪽 잔여가 모두 비었는지."""
        return self.residual_checksums_a == 0 and self.residual_checksums_b == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "shared_checksums": self.shared_checksums,
            "matched_entries": self.matched_entries,
            "residual_checksums_a": self.residual_checksums_a,
            "residual_checksums_b": self.residual_checksums_b,
            "residual_entries_a": self.residual_entries_a,
            "residual_entries_b": self.residual_entries_b,
        }


@dataclass
class CompareResult:
    """compare 서비스 결과: 요약 + 리포트 라인."""
    summary: ReconcileSummary
    report_lines: list[str] = field(default_factory=list)
    report_path: Path | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary.to_dict(),
            "report_path": str(self.report_path) if self.report_path else None,
        }


# =============================================================================
# Run Log Schemas
# =============================================================================

@dataclass
class WarningLog:
    """
    경고 로그.

    경고 필수 컨텍스트: level, code, source, message
    """
    level: str = "warning"
    code: str = ""
    source: str = ""  # manifest 경로 또는 파일 경로
    checksum: str | None = None
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "code": self.code,
            "source": self.source,
            "checksum": self.checksum,
            "message": self.message,
        }


@dataclass
class RunLog:
    """
    감사 실행 로그.

    compare/digest 실행 단위의 결과 및 메타데이터.
    """
    run_id: str
    command: str  # compare, digest
    started_at: str  # ISO 8601
    finished_at: str | None = None
    result: str = "pending"  # pending, success, differences, failed

    inputs: list[str] = field(default_factory=list)
    summary: dict[str, Any] | None = None

    warnings: list[WarningLog] = field(default_factory=list)

    # Error (if failed)
    error_code: str | None = None
    error_context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "command": self.command,
            "started_at": self.started_at,
            "finished_at": self.finished_at,
            "result": self.result,
            "inputs": list(self.inputs),
            "summary": self.summary,
            "warnings": [w.to_dict() for w in self.warnings],
            "error_code": self.error_code,
            "error_context": self.error_context,
        }
