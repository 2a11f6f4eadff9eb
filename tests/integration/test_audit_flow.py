"""
test_audit_flow.py - 전체 감사 흐름 통합 테스트

검증 포인트:
- 원본/사본 디렉터리 → digest_files → checksum 목록 파일
- 목록 두 개 → CompareService → 잔여 리포트
- run log 저장 및 재로드
"""

from pathlib import Path

import pytest

from manifest_audit.config import AuditConfig
from manifest_audit.core.hashing import DigestEngine, digest_files
from manifest_audit.core.logging import (
    complete_run_log,
    create_run_log,
    load_run_log,
    save_run_log,
)
from manifest_audit.services import CompareService

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def audit_root(tmp_path: Path) -> Path:
    """원본/사본 디렉터리 구성."""
    root = tmp_path / "audit"
    source = root / "source"
    copy = root / "copy" / "MIRROR"
    source.mkdir(parents=True)
    copy.mkdir(parents=True)

    # 동일 내용, 경로/대소문자만 다름
    (source / "tile_01.tif").write_bytes(b"\x00" * 255)
    (copy / "TILE_01.TIF").write_bytes(b"\x00" * 255)

    # 같은 내용 파일 여러 개 (다중도)
    for name in ("a.txt", "b.txt"):
        (source / name).write_bytes(b"hello\n")
    (copy / "a.txt").write_bytes(b"hello\n")

    # 사본에서 내용 변경
    (source / "report.csv").write_bytes(b"123456789")
    (copy / "report.csv").write_bytes(b"abc")

    return root


def write_manifest(files: list[Path], out: Path, engine: DigestEngine) -> Path:
    """cksum 기준 "checksum,filename" 목록 작성."""
    batch = digest_files(files, engine)
    assert batch.ok
    lines = [f"{digests['cksum']},{path}" for path, digests in batch.results.items()]
    out.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return out


# =============================================================================
# 통합 테스트
# =============================================================================


class TestAuditFlow:
    """digest → manifest → reconcile → report."""

    def test_full_flow(self, audit_root: Path):
        engine = DigestEngine(algorithms=("cksum",))
        source_files = sorted((audit_root / "source").iterdir())
        copy_files = sorted((audit_root / "copy" / "MIRROR").iterdir())

        source_list = write_manifest(source_files, audit_root / "source.txt", engine)
        copy_list = write_manifest(copy_files, audit_root / "copy.txt", engine)

        run_log = create_run_log("compare", [str(source_list), str(copy_list)])
        report_path = audit_root / "out" / "report.txt"

        result = CompareService(AuditConfig()).compare_files(
            source_list, copy_list, report_path=report_path, run_log=run_log
        )

        summary = result.summary
        assert summary.shared_checksums == 2
        assert summary.matched_entries == 2
        assert summary.residual_entries_a == 2
        assert summary.residual_entries_b == 1

        source_dir = audit_root / "source"
        copy_dir = audit_root / "copy" / "MIRROR"
        assert report_path.read_text(encoding="utf-8").splitlines() == [
            "Unique files in source.txt: 2",
            f'B3BEAB91: [{source_dir / "b.txt"}]',
            f'377A6011: [{source_dir / "report.csv"}]',
            "Unique files in copy.txt: 1",
            f'48AA78A2: [{copy_dir / "report.csv"}]',
        ]

        complete_run_log(run_log, result="differences", summary=summary.to_dict())
        log_path = save_run_log(run_log, audit_root / "logs")
        loaded = load_run_log(log_path)
        assert loaded["result"] == "differences"
        assert loaded["summary"]["matched_entries"] == 2

    def test_identical_trees(self, audit_root: Path):
        """같은 디렉터리 두 번 → 차이 없음."""
        engine = DigestEngine()
        files = sorted((audit_root / "source").iterdir())

        a = write_manifest(files, audit_root / "a.txt", engine)
        b = write_manifest(list(reversed(files)), audit_root / "b.txt", engine)

        result = CompareService().compare_files(a, b)

        assert result.summary.identical
