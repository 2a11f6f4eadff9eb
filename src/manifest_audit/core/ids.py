"""
감사 실행 식별자.

compare / digest 실행마다 하나씩 발급되어 run log 파일명(run_<id>.json)에 쓰인다.
"""

import uuid
from datetime import UTC, datetime

RUN_ID_PREFIX = "RUN"
RUN_ID_TIME_FORMAT = "%Y%m%d%H%M%S"


def generate_run_id(at: datetime | None = None) -> str:
    """
    RUN-<UTC 초 단위 시각>-<uuid4 앞 8자리>.

    같은 초에 여러 번 실행해도 uuid 부분으로 구분되며, 문자열 정렬이 곧 시간순이다.

    Args:
        at: 기준 시각 (기본: 현재 UTC)
    """
    stamp = (at or datetime.now(UTC)).strftime(RUN_ID_TIME_FORMAT)
    return f"{RUN_ID_PREFIX}-{stamp}-{uuid.uuid4().hex[:8]}"
