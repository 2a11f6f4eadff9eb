"""
Pytest fixtures for manifest-audit tests.

테스트 구성:
- 참조 파일 (cksum 기준값 검증용)
- manifest 생성 헬퍼
- 설정 파일
"""

from collections.abc import Callable
from pathlib import Path

import pytest
import yaml

from manifest_audit.core.manifest import ChecksumManifest, FileRef

# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """프로젝트 루트 경로."""
    return Path(__file__).parent.parent


@pytest.fixture
def fixtures_dir() -> Path:
    """tests/fixtures 경로."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def empty_file(fixtures_dir: Path) -> Path:
    """빈 파일 (cksum = FFFFFFFF)."""
    return fixtures_dir / "cksum" / "empty.txt"


@pytest.fixture
def sample_file(fixtures_dir: Path) -> Path:
    """내용이 "test"인 파일 (cksum = B75D6A42)."""
    return fixtures_dir / "cksum" / "test.txt"


@pytest.fixture
def default_config_path(project_root: Path) -> Path:
    """default.yaml 경로."""
    return project_root / "default.yaml"


@pytest.fixture
def default_config(default_config_path: Path) -> dict:
    """기본 설정 로드."""
    with open(default_config_path, encoding="utf-8") as f:
        return yaml.safe_load(f)


# =============================================================================
# Manifest Fixtures
# =============================================================================

@pytest.fixture
def make_manifest() -> Callable[..., ChecksumManifest]:
    """
    dict → ChecksumManifest (add_checksum만 사용).

    Usage:
        manifest = make_manifest({"DEADBEEF": ["a.txt", "b.txt"]})
    """

    def _make(
        entries: dict[str, list[FileRef]] | None = None,
        label: str = "",
    ) -> ChecksumManifest:
        manifest = ChecksumManifest(label=label)
        for checksum, refs in (entries or {}).items():
            for ref in refs:
                manifest.add_checksum(checksum, ref)
        return manifest

    return _make


@pytest.fixture
def write_text_manifest(tmp_path: Path) -> Callable[[str, list[str]], Path]:
    """줄 목록으로 텍스트 manifest 파일 생성."""

    def _write(name: str, lines: list[str]) -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
