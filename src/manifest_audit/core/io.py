"""
원자적 파일 쓰기: run log, 리포트.

동작:
- 중간 상태 없음: temp → rename
- 가능한 환경에서 내구성 강화: 파일 fsync + 디렉토리 fsync
- fsync 실패 시 경고 남기고 계속 진행
"""

import json
import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def _sync_parent(path: Path) -> None:
    """rename 결과를 디스크에 남기기 위해 상위 디렉터리를 fsync. 실패는 경고만."""
    flags = os.O_RDONLY | getattr(os, "O_DIRECTORY", 0)
    try:
        fd = os.open(path.parent, flags)
    except OSError as e:
        logger.warning(f"Cannot open {path.parent} for fsync: {e}")
        return
    try:
        os.fsync(fd)
    except OSError as e:
        logger.warning(f"fsync of {path.parent} failed, {path.name} may not survive a crash: {e}")
    finally:
        os.close(fd)


def atomic_write_text(path: Path, text: str, encoding: str = "utf-8") -> None:
    """
    원자적 텍스트 쓰기.

    - 실패 시 cleanup: temp 파일 삭제
    - 기존 파일 보존: rename 실패 시 원본 유지

    Args:
        path: 저장할 파일 경로
        text: 파일 내용
        encoding: 인코딩
    """
    dir_path = path.parent
    dir_path.mkdir(parents=True, exist_ok=True)

    temp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=dir_path,
            suffix=".tmp",
            delete=False,
            encoding=encoding,
            newline="\n",
        ) as f:
            temp_path = Path(f.name)
            f.write(text)
            f.flush()
            try:
                os.fsync(f.fileno())
            except OSError as e:
                logger.warning(
                    f"File fsync failed for {path}: {e}. "
                    f"Data may not be durable on power loss."
                )

        os.rename(temp_path, path)  # 원자적
        _sync_parent(path)

    except Exception:
        if temp_path and temp_path.exists():
            try:
                temp_path.unlink()
            except OSError:
                pass
        raise


def atomic_write_json(path: Path, data: dict) -> None:
    """원자적 JSON 쓰기 (indent=2, UTF-8)."""
    atomic_write_text(path, json.dumps(data, indent=2, ensure_ascii=False))
