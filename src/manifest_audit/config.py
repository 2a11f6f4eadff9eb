"""
감사 설정: default.yaml → AuditConfig

누락된 키는 dataclass 기본값 사용. 잘못된 값은 CONFIG_INVALID.
"""

import codecs
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from manifest_audit.domain.constants import (
    DEFAULT_ALGORITHMS,
    READ_CHUNK_SIZE,
    TEXT_DELIMITER,
    TEXT_ENCODING,
    XML_DEFAULT_DIGEST_PREFIX,
)
from manifest_audit.domain.errors import AuditError, ErrorCodes


@dataclass
class TextLoaderConfig:
    """checksum,filename 텍스트 manifest 설정."""
    checksum_column: int = 0  # 0: checksum,filename / 1: filename,checksum
    delimiter: str = TEXT_DELIMITER
    encoding: str = TEXT_ENCODING
    upper_case: bool = False


@dataclass
class XmlLoaderConfig:
    """XML 리포트 manifest 설정."""
    digest_prefix: str = XML_DEFAULT_DIGEST_PREFIX


@dataclass
class AuditConfig:
    """전체 감사 설정."""
    algorithms: list[str] = field(default_factory=lambda: list(DEFAULT_ALGORITHMS))
    chunk_size: int = READ_CHUNK_SIZE
    include_crc32: bool = True
    text: TextLoaderConfig = field(default_factory=TextLoaderConfig)
    xml: XmlLoaderConfig = field(default_factory=XmlLoaderConfig)


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise AuditError(ErrorCodes.CONFIG_INVALID, key=key, value=value)
    return value


def _invalid(key: str, value: Any, reason: str) -> AuditError:
    return AuditError(ErrorCodes.CONFIG_INVALID, key=key, value=value, reason=reason)


def _get_bool(section: dict[str, Any], key: str, default: bool, prefix: str) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise _invalid(f"{prefix}.{key}", value, "must be true or false")
    return value


def _get_str(section: dict[str, Any], key: str, default: str, prefix: str) -> str:
    value = section.get(key, default)
    if not isinstance(value, str) or not value:
        raise _invalid(f"{prefix}.{key}", value, "must be a non-empty string")
    return value


def _get_int(section: dict[str, Any], key: str, default: int, prefix: str) -> int:
    value = section.get(key, default)
    # bool은 int 하위 타입이므로 따로 제외
    if isinstance(value, bool) or not isinstance(value, int):
        raise _invalid(f"{prefix}.{key}", value, "must be an integer")
    return value


def _get_algorithms(digest: dict[str, Any]) -> list[str]:
    value = digest.get("algorithms", list(DEFAULT_ALGORITHMS))
    if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
        raise _invalid("digest.algorithms", value, "must be a list of algorithm names")
    return list(value)


def parse_config(data: dict[str, Any] | None) -> AuditConfig:
    """
    dict → AuditConfig.

    키마다 타입을 검사하며, 틀린 값은 사용 시점이 아니라 로드 시점에 실패한다.

    Args:
        data: yaml.safe_load 결과 (None이면 기본값)

    Returns:
        AuditConfig

    Raises:
        AuditError: CONFIG_INVALID
    """
    data = data or {}
    if not isinstance(data, dict):
        raise AuditError(ErrorCodes.CONFIG_INVALID, reason="top level must be a mapping")

    digest = _section(data, "digest")
    loaders = _section(data, "loaders")
    text = _section(loaders, "text")
    xml = _section(loaders, "xml")

    chunk_size = _get_int(digest, "chunk_size", READ_CHUNK_SIZE, "digest")
    if chunk_size <= 0:
        raise _invalid("digest.chunk_size", chunk_size, "must be positive")

    checksum_column = _get_int(text, "checksum_column", 0, "loaders.text")
    if checksum_column not in (0, 1):
        raise _invalid("loaders.text.checksum_column", checksum_column, "must be 0 or 1")

    encoding = _get_str(text, "encoding", TEXT_ENCODING, "loaders.text")
    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise _invalid("loaders.text.encoding", encoding, "unknown encoding") from e

    return AuditConfig(
        algorithms=_get_algorithms(digest),
        chunk_size=chunk_size,
        include_crc32=_get_bool(digest, "include_crc32", True, "digest"),
        text=TextLoaderConfig(
            checksum_column=checksum_column,
            delimiter=_get_str(text, "delimiter", TEXT_DELIMITER, "loaders.text"),
            encoding=encoding,
            upper_case=_get_bool(text, "upper_case", False, "loaders.text"),
        ),
        xml=XmlLoaderConfig(
            digest_prefix=_get_str(xml, "digest_prefix", XML_DEFAULT_DIGEST_PREFIX, "loaders.xml"),
        ),
    )


def load_config(config_path: Path | None = None) -> AuditConfig:
    """
    YAML 설정 파일 로드.

    Args:
        config_path: 설정 파일 경로 (None이면 기본값)

    Returns:
        AuditConfig

    Raises:
        AuditError: CONFIG_INVALID (파일 없음, 읽기 실패, YAML 오류, 잘못된 값)
    """
    if config_path is None:
        return AuditConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise AuditError(ErrorCodes.CONFIG_INVALID, path=str(config_path), reason="not found") from e
    except OSError as e:
        raise AuditError(ErrorCodes.CONFIG_INVALID, path=str(config_path), cause=e) from e
    except yaml.YAMLError as e:
        raise AuditError(ErrorCodes.CONFIG_INVALID, path=str(config_path), cause=e) from e

    return parse_config(data)
