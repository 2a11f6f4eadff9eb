#!/usr/bin/env python3
"""
checksum_diff.py - 두 checksum manifest의 차이 리포트

두 목록(텍스트 "checksum,filename" 또는 XML 리포트)을 로드하여
checksum + 파일명(basename, 대소문자 무시)이 일치하는 항목을 양쪽에서 제거하고
남은 항목만 리포트한다.

종료 코드:
    0: 차이 없음
    1: 차이 있음
    2: 로드/설정 오류

사용법:
    # 기본 실행
    uv run python scripts/checksum_diff.py source.txt copy.xml

    # 리포트 파일 + run log 저장
    uv run python scripts/checksum_diff.py source.txt copy.xml --report report.txt --log-dir logs

    # filename,checksum 형식 목록
    uv run python scripts/checksum_diff.py a.csv b.csv --config my.yaml
"""

import argparse
import logging
import sys
from pathlib import Path

from manifest_audit.config import load_config
from manifest_audit.core.logging import complete_run_log, create_run_log, save_run_log
from manifest_audit.domain.errors import AuditError
from manifest_audit.services import CompareService

# 로깅 설정
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

EXIT_IDENTICAL = 0
EXIT_DIFFERENCES = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="두 checksum manifest의 차이 리포트",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("manifest_a", type=Path, help="첫 번째 manifest")
    parser.add_argument("manifest_b", type=Path, help="두 번째 manifest")
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="리포트 파일 경로 (잔여 항목 전체 목록)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="설정 YAML 경로 (기본: 내장 기본값)",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="run log 저장 디렉터리 (지정 시에만 저장)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    run_log = create_run_log("compare", [str(args.manifest_a), str(args.manifest_b)])

    try:
        config = load_config(args.config)
        result = CompareService(config).compare_files(
            args.manifest_a,
            args.manifest_b,
            report_path=args.report,
            run_log=run_log,
        )
    except AuditError as e:
        logger.error(f"비교 실패: {e}")
        complete_run_log(
            run_log,
            result="failed",
            error_code=e.code,
            error_context=e.to_dict(),
        )
        if args.log_dir:
            save_run_log(run_log, args.log_dir)
        return EXIT_ERROR

    summary = result.summary
    complete_run_log(
        run_log,
        result="success" if summary.identical else "differences",
        summary=summary.to_dict(),
    )

    logger.info("=" * 50)
    logger.info("비교 결과:")
    logger.info(f"  공유 checksum: {summary.shared_checksums}, 일치: {summary.matched_entries}")
    logger.info(
        f"  잔여 A: {summary.residual_checksums_a} checksums "
        f"({summary.residual_entries_a} entries)"
    )
    logger.info(
        f"  잔여 B: {summary.residual_checksums_b} checksums "
        f"({summary.residual_entries_b} entries)"
    )
    if run_log.warnings:
        logger.warning(f"  경고: {len(run_log.warnings)}개")

    if args.log_dir:
        log_path = save_run_log(run_log, args.log_dir)
        logger.info(f"  run log: {log_path}")

    return EXIT_IDENTICAL if summary.identical else EXIT_DIFFERENCES


if __name__ == "__main__":
    sys.exit(main())
