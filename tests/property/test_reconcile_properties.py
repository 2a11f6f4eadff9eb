"""
Property-based tests for manifest reconciliation.

무작위 manifest 쌍으로 검증:
- 재실행 no-op
- (A, B) / (B, A) 결과 동일 (basename 다중집합 기준)
- 동일 manifest → 빈 결과
- 한쪽에만 있는 checksum 보존
- 이름 없는 항목이 많은 비대칭 bucket에서도 다중도 공식 성립
"""

from collections import Counter

import pytest
from hypothesis import given, settings, strategies as st

from manifest_audit.core.manifest import ChecksumManifest, basename_key
from manifest_audit.core.reconcile import reconcile

pytestmark = pytest.mark.property

# 작은 알파벳으로 충돌(같은 checksum/basename)이 자주 나도록
CHECKSUMS = st.sampled_from(["DEADBEEF", "BEEFCAFE", "0", "FFFFFFFF"])
DIRS = st.sampled_from(["", "a/", "B/", "c\\d\\", "/mnt/copy/"])
NAMES = st.sampled_from(["x.txt", "X.TXT", "y.bin", "z", "Y.bin"])


@st.composite
def file_refs(draw):
    """파일 참조: None 또는 디렉터리 + 이름."""
    if draw(st.booleans()) and draw(st.booleans()):
        return None
    return draw(DIRS) + draw(NAMES)


@st.composite
def manifests(draw, max_size: int = 25):
    pairs = draw(st.lists(st.tuples(CHECKSUMS, file_refs()), max_size=max_size))
    return ChecksumManifest.from_pairs(pairs)


def identity_counts(manifest: ChecksumManifest) -> Counter:
    """(checksum, basename) 다중집합."""
    return Counter(
        (checksum, basename_key(ref))
        for checksum, bucket in manifest.items()
        for ref in bucket
    )


@settings(max_examples=200)
@given(manifests(), manifests())
def test_idempotent(a: ChecksumManifest, b: ChecksumManifest):
    """두 번째 reconcile은 no-op."""
    reconcile(a, b)
    after_a, after_b = a.copy(), b.copy()

    reconcile(a, b)

    assert a == after_a
    assert b == after_b


@settings(max_examples=200)
@given(manifests(), manifests())
def test_order_independent(a: ChecksumManifest, b: ChecksumManifest):
    """(A, B)와 (B, A) 잔여 집합이 같음."""
    a1, b1 = a.copy(), b.copy()
    a2, b2 = a.copy(), b.copy()

    reconcile(a1, b1)
    reconcile(b2, a2)

    assert identity_counts(a1) == identity_counts(a2)
    assert identity_counts(b1) == identity_counts(b2)


@settings(max_examples=200)
@given(manifests(), manifests())
def test_multiplicity_formula(a: ChecksumManifest, b: ChecksumManifest):
    """잔여 = max(0, A 개수 - B 개수), (checksum, basename)별."""
    before_a, before_b = identity_counts(a), identity_counts(b)

    reconcile(a, b)

    assert identity_counts(a) == before_a - before_b
    assert identity_counts(b) == before_b - before_a


@given(manifests())
def test_identical_reconcile_to_empty(a: ChecksumManifest):
    """동일 manifest → 둘 다 빈 manifest."""
    b = a.copy()

    reconcile(a, b)

    assert len(a) == 0
    assert len(b) == 0


@given(manifests(), manifests())
def test_unshared_checksums_untouched(a: ChecksumManifest, b: ChecksumManifest):
    """한쪽에만 있는 checksum bucket은 그대로."""
    only_a = {k: list(v) for k, v in a.items() if k not in b}
    only_b = {k: list(v) for k, v in b.items() if k not in a}

    reconcile(a, b)

    for checksum, bucket in only_a.items():
        assert a[checksum] == bucket
        assert checksum not in b
    for checksum, bucket in only_b.items():
        assert b[checksum] == bucket
        assert checksum not in a


@given(
    st.integers(min_value=0, max_value=30),
    st.integers(min_value=0, max_value=30),
)
def test_absent_heavy_asymmetric_buckets(count_a: int, count_b: int):
    """이름 없는 항목만 있는 비대칭 bucket: min(a, b)개 상쇄."""
    a = ChecksumManifest.from_pairs([("K", None)] * count_a)
    b = ChecksumManifest.from_pairs([("K", None)] * count_b)

    summary = reconcile(a, b)

    assert summary.matched_entries == min(count_a, count_b)
    assert a.entry_count() == max(0, count_a - count_b)
    assert b.entry_count() == max(0, count_b - count_a)
