"""
test_config.py - 설정 로드 테스트

DoD:
- default.yaml = 내장 기본값
- 누락 키 → 기본값
- 잘못된 값 / 파일 없음 / YAML 오류 → CONFIG_INVALID
"""

from pathlib import Path

import pytest

from manifest_audit.config import AuditConfig, load_config, parse_config
from manifest_audit.domain.errors import AuditError, ErrorCodes


class TestLoadConfig:
    """load_config 테스트."""

    def test_default_yaml_matches_defaults(self, default_config_path: Path):
        """default.yaml 로드 결과 = AuditConfig()."""
        assert load_config(default_config_path) == AuditConfig()

    def test_default_yaml_keys(self, default_config: dict):
        """default.yaml 구조."""
        assert default_config["digest"]["algorithms"] == ["cksum", "MD5", "SHA-1", "SHA-256"]
        assert default_config["loaders"]["xml"]["digest_prefix"] == "cksum"

    def test_none_returns_defaults(self):
        """경로 없음 → 기본값."""
        assert load_config(None) == AuditConfig()

    def test_missing_file(self, tmp_path: Path):
        """없는 파일 → CONFIG_INVALID."""
        with pytest.raises(AuditError) as exc:
            load_config(tmp_path / "nope.yaml")

        assert exc.value.code == ErrorCodes.CONFIG_INVALID

    def test_yaml_error(self, tmp_path: Path):
        """YAML 문법 오류 → CONFIG_INVALID."""
        path = tmp_path / "bad.yaml"
        path.write_text("digest: [unclosed\n", encoding="utf-8")

        with pytest.raises(AuditError) as exc:
            load_config(path)

        assert exc.value.code == ErrorCodes.CONFIG_INVALID

    def test_directory_path(self, tmp_path: Path):
        """디렉터리 경로 (읽기 불가) → CONFIG_INVALID."""
        with pytest.raises(AuditError) as exc:
            load_config(tmp_path)

        assert exc.value.code == ErrorCodes.CONFIG_INVALID

    def test_empty_file(self, tmp_path: Path):
        """빈 파일 → 기본값."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(path) == AuditConfig()


class TestParseConfig:
    """parse_config 테스트."""

    def test_partial_override(self):
        """일부 키만 지정."""
        config = parse_config({
            "digest": {"algorithms": ["MD5"], "include_crc32": False},
            "loaders": {"text": {"checksum_column": 1, "delimiter": ";"}},
        })

        assert config.algorithms == ["MD5"]
        assert config.include_crc32 is False
        assert config.chunk_size == 32768
        assert config.text.checksum_column == 1
        assert config.text.delimiter == ";"
        assert config.xml.digest_prefix == "cksum"

    @pytest.mark.parametrize(
        "data",
        [
            {"digest": {"chunk_size": 0}},
            {"digest": {"chunk_size": "big"}},
            {"digest": {"chunk_size": True}},
            {"digest": {"algorithms": None}},
            {"digest": {"algorithms": "cksum"}},
            {"digest": {"algorithms": ["MD5", 5]}},
            {"digest": {"include_crc32": "yes"}},
            {"loaders": {"text": {"checksum_column": 2}}},
            {"loaders": {"text": {"delimiter": ""}}},
            {"loaders": {"text": {"encoding": "bogus-enc"}}},
            {"loaders": {"text": {"encoding": None}}},
            {"loaders": {"text": {"upper_case": 1}}},
            {"loaders": {"xml": {"digest_prefix": None}}},
            {"digest": ["cksum"]},
            ["not", "a", "mapping"],
        ],
    )
    def test_invalid_values(self, data):
        """잘못된 값/타입 → CONFIG_INVALID."""
        with pytest.raises(AuditError) as exc:
            parse_config(data)

        assert exc.value.code == ErrorCodes.CONFIG_INVALID

    def test_invalid_key_reported(self):
        """에러 context에 문제 키 포함."""
        with pytest.raises(AuditError) as exc:
            parse_config({"digest": {"algorithms": "cksum"}})

        assert exc.value.context["key"] == "digest.algorithms"

    def test_encoding_alias_accepted(self):
        """codec 별칭 허용."""
        config = parse_config({"loaders": {"text": {"encoding": "cp949"}}})

        assert config.text.encoding == "cp949"
