"""
ManifestReconciler: 두 manifest에서 서로 대응되는 항목을 제거.

규칙:
- 양쪽 모두에 있는 checksum만 처리, 한쪽에만 있는 키는 그대로 둔다
- A bucket의 각 참조를 순서대로, B bucket에서 처음 일치하는 참조와 짝지음
- 한 번의 일치 = 양쪽에서 한 개씩 제거 (다중도 보존)
- bucket이 비면 해당 키 삭제
- A→B 한 방향 통과로 충분 (일치 관계가 대칭이고 양쪽에서 동시에 제거)
- 두 번째 호출은 no-op

비용: 공유 키마다 |A bucket| × |B bucket|. 큰 bucket은 CRC32/cksum 같은
약한 알고리즘에서만 생긴다.

동시성: 호출 동안 두 manifest에 대한 단독 쓰기 권한을 가정.
"""

import logging
from collections.abc import MutableMapping

from manifest_audit.core.manifest import Bucket, FileRef, references_match
from manifest_audit.domain.schemas import ReconcileSummary

logger = logging.getLogger(__name__)


def _find_match(ref: FileRef, candidates: Bucket) -> int | None:
    """candidates에서 ref와 일치하는 첫 번째 인덱스."""
    for index, candidate in enumerate(candidates):
        if references_match(ref, candidate):
            return index
    return None


def _reconcile_bucket(bucket_a: Bucket, bucket_b: Bucket) -> int:
    """
    한 checksum의 두 bucket을 제자리에서 정리.

    A는 일치하지 않은 참조로 새 목록을 만들어 교체하고 (순회 중 삭제 없음),
    B는 인덱스로 일치 항목을 삭제한다. 두 list 객체의 identity는 유지.

    Returns:
        일치한 쌍의 수
    """
    residual_a: Bucket = []
    matched = 0

    for ref in bucket_a:
        index = _find_match(ref, bucket_b)
        if index is None:
            residual_a.append(ref)
        else:
            del bucket_b[index]
            matched += 1

    bucket_a[:] = residual_a
    return matched


def reconcile(
    manifest_a: MutableMapping[str, Bucket],
    manifest_b: MutableMapping[str, Bucket],
) -> ReconcileSummary:
    """
    두 manifest를 제자리에서 reconcile.

    호출 후 두 manifest에는 상대편에 대응 항목이 없는
    (checksum, basename) 항목만 남는다.

    Args:
        manifest_a: 기준 manifest (변경됨)
        manifest_b: 비교 manifest (변경됨)

    Returns:
        ReconcileSummary (카운트만; 결과는 manifest 자체)
    """
    summary = ReconcileSummary()

    # 순회 중 키 삭제를 위해 스냅샷
    for checksum in list(manifest_a.keys()):
        if checksum not in manifest_b:
            continue

        summary.shared_checksums += 1
        bucket_a = manifest_a[checksum]
        bucket_b = manifest_b[checksum]

        summary.matched_entries += _reconcile_bucket(bucket_a, bucket_b)

        if not bucket_a:
            del manifest_a[checksum]
        if not bucket_b:
            del manifest_b[checksum]

    summary.residual_checksums_a = len(manifest_a)
    summary.residual_checksums_b = len(manifest_b)
    summary.residual_entries_a = sum(len(b) for b in manifest_a.values())
    summary.residual_entries_b = sum(len(b) for b in manifest_b.values())

    logger.info(
        f"Reconciled {summary.shared_checksums} shared checksums: "
        f"{summary.matched_entries} matched, "
        f"{summary.residual_checksums_a}/{summary.residual_checksums_b} "
        f"checksums left (A/B)"
    )
    return summary
