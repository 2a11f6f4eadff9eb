"""
Run logging: 감사 실행 로그 스키마, 이벤트, 경고

규칙:
- 경고 필수 컨텍스트: level, code, source, message
- run log는 실행마다 새 파일 (run_{run_id}.json)
- 저장은 원자적 쓰기
"""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from manifest_audit.core.ids import generate_run_id
from manifest_audit.core.io import atomic_write_json
from manifest_audit.domain.constants import RUN_LOG_GLOB
from manifest_audit.domain.schemas import RunLog, WarningLog

# =============================================================================
# Run Log Management
# =============================================================================


def create_run_log(command: str, inputs: list[str] | None = None) -> RunLog:
    """
    새 RunLog 생성.

    Args:
        command: 실행 명령 (compare, digest)
        inputs: 입력 경로 목록

    Returns:
        초기화된 RunLog
    """
    now = datetime.now(UTC).isoformat()

    return RunLog(
        run_id=generate_run_id(),
        command=command,
        started_at=now,
        inputs=list(inputs or []),
        result="pending",
    )


def emit_warning(
    run_log: RunLog,
    code: str,
    source: str,
    message: str,
    checksum: str | None = None,
) -> None:
    """
    경고 이벤트 기록.

    Args:
        run_log: RunLog 인스턴스
        code: 경고 코드 (WarningCodes)
        source: manifest 또는 파일 경로
        message: 경고 메시지
        checksum: 관련 checksum (있으면)
    """
    run_log.warnings.append(
        WarningLog(
            level="warning",
            code=code,
            source=source,
            checksum=checksum,
            message=message,
        )
    )


def complete_run_log(
    run_log: RunLog,
    result: str,
    summary: dict[str, Any] | None = None,
    error_code: str | None = None,
    error_context: dict[str, Any] | None = None,
) -> None:
    """
    RunLog 완료 처리.

    Args:
        run_log: RunLog 인스턴스
        result: success, differences, failed
        summary: 결과 요약 (ReconcileSummary.to_dict() 등)
        error_code: 에러 코드 (실패 시)
        error_context: 에러 컨텍스트 (실패 시)
    """
    run_log.finished_at = datetime.now(UTC).isoformat()
    run_log.result = result
    run_log.summary = summary

    if result == "failed":
        run_log.error_code = error_code
        run_log.error_context = error_context


def save_run_log(run_log: RunLog, logs_dir: Path) -> Path:
    """
    RunLog를 파일로 저장.

    Returns:
        저장된 파일 경로
    """
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / f"run_{run_log.run_id}.json"
    atomic_write_json(log_path, run_log.to_dict())
    return log_path


def load_run_log(log_path: Path) -> dict[str, Any]:
    """RunLog 파일 로드."""
    data: dict[str, Any] = json.loads(log_path.read_text(encoding="utf-8"))
    return data


def list_run_logs(logs_dir: Path) -> list[Path]:
    """
    logs 디렉터리의 모든 run log 파일 목록.

    Returns:
        로그 파일 경로 목록 (최신순)
    """
    if not logs_dir.exists():
        return []

    logs = list(logs_dir.glob(RUN_LOG_GLOB))
    logs.sort(key=lambda p: p.stat().st_mtime, reverse=True)
    return logs
