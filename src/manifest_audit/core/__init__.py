"""
Core layer: digest 계산, manifest, reconcile.

역할:
- 단일 통과 다중 digest (cksum 포함)
- checksum manifest 자료구조
- 두 manifest의 차이만 남기는 reconcile
"""

from .cksum import CksumHash, cksum_bytes
from .hashing import DigestEngine, DigestReader, digest_files, generate_checksum
from .logging import (
    complete_run_log,
    create_run_log,
    emit_warning,
    save_run_log,
)
from .manifest import (
    ChecksumManifest,
    FileRef,
    add_checksum,
    basename_key,
    references_match,
)
from .reconcile import reconcile
from .registry import DigestRegistry, build_default_registry

__all__ = [
    # cksum
    "CksumHash",
    "cksum_bytes",
    # registry
    "DigestRegistry",
    "build_default_registry",
    # hashing
    "DigestEngine",
    "DigestReader",
    "digest_files",
    "generate_checksum",
    # manifest
    "ChecksumManifest",
    "FileRef",
    "add_checksum",
    "basename_key",
    "references_match",
    # reconcile
    "reconcile",
    # logging
    "create_run_log",
    "emit_warning",
    "complete_run_log",
    "save_run_log",
]
