#!/usr/bin/env python3
"""
calc_checksums.py - 파일별 다중 checksum 계산

파일을 한 번만 읽어 CRC32, cksum, MD5, SHA-1, SHA-256을 모두 계산한다.
읽기 실패한 파일은 건너뛰고 계속 진행한다.

출력 형식:
    text: 파일마다 "File: <경로>" 후 "<알고리즘>: <값>" 줄
    csv:  "<checksum>,<경로>" (checksum_diff.py 입력으로 사용 가능)

종료 코드:
    0: 모든 파일 성공
    1: 일부 파일 실패
    2: 설정 오류 (알 수 없는 알고리즘 등)

사용법:
    uv run python scripts/calc_checksums.py a.bin b.bin
    uv run python scripts/calc_checksums.py data/*.tif --format csv --csv-algorithm cksum > list.txt
"""

import argparse
import logging
import sys
from pathlib import Path

from manifest_audit.config import load_config
from manifest_audit.core.hashing import DigestEngine, digest_files
from manifest_audit.core.logging import complete_run_log, create_run_log, save_run_log
from manifest_audit.domain.errors import AuditError
from manifest_audit.domain.schemas import DigestResult

# 로깅 설정 (stdout은 결과 전용)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


def format_text(path: Path, digests: DigestResult) -> list[str]:
    lines = [f"File: {path.absolute()}"]
    lines.extend(f"{name}: {value}" for name, value in digests.items())
    return lines


def format_csv(path: Path, digests: DigestResult, algorithm: str) -> list[str]:
    return [f"{digests[algorithm]},{path}"]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="파일별 다중 checksum 계산",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("files", nargs="+", type=Path, help="대상 파일")
    parser.add_argument(
        "--algorithms",
        nargs="+",
        default=None,
        help="계산할 알고리즘 (기본: 설정 파일 값)",
    )
    parser.add_argument(
        "--format",
        choices=("text", "csv"),
        default="text",
        help="출력 형식 (기본: text)",
    )
    parser.add_argument(
        "--csv-algorithm",
        default="cksum",
        help="csv 출력에 쓸 알고리즘 (기본: cksum)",
    )
    parser.add_argument("--config", type=Path, default=None, help="설정 YAML 경로")
    parser.add_argument("--log-dir", type=Path, default=None, help="run log 저장 디렉터리")

    args = parser.parse_args(argv)

    run_log = create_run_log("digest", [str(p) for p in args.files])

    try:
        config = load_config(args.config)
        algorithms = args.algorithms or config.algorithms
        if args.format == "csv" and args.csv_algorithm not in algorithms:
            algorithms = [*algorithms, args.csv_algorithm]
        engine = DigestEngine(
            algorithms=algorithms,
            chunk_size=config.chunk_size,
            include_crc32=config.include_crc32,
        )
    except AuditError as e:
        logger.error(f"설정 오류: {e}")
        complete_run_log(run_log, result="failed", error_code=e.code, error_context=e.to_dict())
        if args.log_dir:
            save_run_log(run_log, args.log_dir)
        return 2

    batch = digest_files(args.files, engine, run_log=run_log)

    for path, digests in batch.results.items():
        if args.format == "csv":
            lines = format_csv(path, digests, args.csv_algorithm)
        else:
            lines = format_text(path, digests)
        for line in lines:
            print(line)

    complete_run_log(
        run_log,
        result="success" if batch.ok else "failed",
        summary={"digested": len(batch.results), "failed": len(batch.failures)},
    )
    if args.log_dir:
        save_run_log(run_log, args.log_dir)

    if batch.failures:
        for failure in batch.failures:
            logger.warning(f"읽기 실패: {failure.path} ({failure.code})")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
