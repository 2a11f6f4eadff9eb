"""
Compare 서비스: manifest 두 개 → reconcile → 잔여 리포트.

흐름:
1. (compare_files) 두 manifest 로드
2. reconcile 한 번 (역방향 재실행 없음)
3. 양쪽 잔여 manifest 리포트 라인 생성, 필요하면 파일로 저장
"""

import logging
from pathlib import Path

from manifest_audit.config import AuditConfig
from manifest_audit.core.manifest import ChecksumManifest
from manifest_audit.core.reconcile import reconcile
from manifest_audit.domain.schemas import CompareResult, RunLog
from manifest_audit.loaders import load_manifest
from manifest_audit.report import format_report, write_report

logger = logging.getLogger(__name__)

DEFAULT_LABEL_A = "Set 1"
DEFAULT_LABEL_B = "Set 2"


class CompareService:
    """
    manifest 비교 서비스.

    Usage:
        service = CompareService(config)
        result = service.compare_files(path_a, path_b, report_path=Path("report.txt"))
        result.summary.identical
    """

    def __init__(self, config: AuditConfig | None = None) -> None:
        self.config = config or AuditConfig()

    def compare_manifests(
        self,
        manifest_a: ChecksumManifest,
        manifest_b: ChecksumManifest,
        report_path: Path | None = None,
        run_log: RunLog | None = None,
    ) -> CompareResult:
        """
        준비된 두 manifest 비교.

        두 manifest는 제자리에서 변경되어 잔여 차이만 남는다.

        Args:
            manifest_a: 첫 번째 manifest
            manifest_b: 두 번째 manifest
            report_path: 리포트 저장 경로 (선택)
            run_log: 결과 요약을 남길 RunLog (선택)

        Returns:
            CompareResult
        """
        label_a = manifest_a.label or DEFAULT_LABEL_A
        label_b = manifest_b.label or DEFAULT_LABEL_B

        logger.info(f"Entries in {label_a}: {len(manifest_a)}")
        logger.info(f"Entries in {label_b}: {len(manifest_b)}")

        summary = reconcile(manifest_a, manifest_b)

        lines = format_report(manifest_a, label_a) + format_report(manifest_b, label_b)
        logger.info(f"Unique files in {label_a}: {summary.residual_checksums_a}")
        logger.info(f"Unique files in {label_b}: {summary.residual_checksums_b}")

        result = CompareResult(summary=summary, report_lines=lines)
        if report_path is not None:
            result.report_path = write_report(report_path, lines)

        if run_log is not None:
            run_log.summary = summary.to_dict()

        return result

    def compare_files(
        self,
        path_a: Path,
        path_b: Path,
        report_path: Path | None = None,
        run_log: RunLog | None = None,
    ) -> CompareResult:
        """
        manifest 파일 두 개 비교.

        Raises:
            AuditError: 로드 실패 (MANIFEST_NOT_FOUND 등), 리포트 쓰기 실패
        """
        logger.info(f"Loading checksum set: {path_a}")
        manifest_a = load_manifest(path_a, self.config, run_log=run_log)
        logger.info(f"Loading checksum set: {path_b}")
        manifest_b = load_manifest(path_b, self.config, run_log=run_log)

        # 같은 파일명이면 리포트에서 구분되도록 경로 사용
        if manifest_a.label == manifest_b.label:
            manifest_a.label = str(path_a)
            manifest_b.label = str(path_b)

        return self.compare_manifests(manifest_a, manifest_b, report_path, run_log)
