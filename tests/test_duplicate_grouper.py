import random
from types import SimpleNamespace

import pytest

from core.duplicate_grouper import (
    DUPLICATE_THRESHOLD,
    group_duplicates,
    is_reviewable,
    normalize_text,
    review_eligible,
)
from core.entities import (
    CandidateStatus,
    DedupeCandidate,
    DuplicateGroup,
    RequirementCandidate,
)
from core.similarity import score


def _c(cid, text):
    return DedupeCandidate(id=cid, text=text)


CHAIN = [
    _c("c1", "uno dos tres cuatro"),
    _c("c2", "tres cuatro cinco seis"),
    _c("c3", "cinco seis siete ocho"),
    _c("c4", "totalmente distinto texto aislado"),
]


def _partition(groups):
    return {g.member_ids for g in groups}


class TestGroupDuplicates:
    def test_empty_input(self):
        assert group_duplicates([]) == []

    def test_default_threshold_is_exposed(self):
        assert 0 < DUPLICATE_THRESHOLD <= 1

    def test_near_duplicates_grouped(self):
        groups = group_duplicates(
            [
                _c("b", "El sistema debe permitir registrar usuarios nuevos"),
                _c("a", "El sistema debe permitir registrar usuarios"),
                _c("z", "Exportar reportes en PDF"),
            ]
        )
        assert groups == [DuplicateGroup(representative_id="a", member_ids=frozenset({"a", "b"}))]
        assert groups[0].duplicate_ids == ["b"]

    def test_same_text_after_normalization(self):
        groups = group_duplicates(
            [_c("x1", "Debe “validar” el correo."), _c("x2", "debe validar el correo")]
        )
        assert _partition(groups) == {frozenset({"x1", "x2"})}

    def test_single_link_closure(self):
        a, b, c = CHAIN[0].text, CHAIN[1].text, CHAIN[2].text
        assert score(a, b) >= 0.3 and score(b, c) >= 0.3
        assert score(a, c) < 0.3

        groups = group_duplicates(CHAIN, threshold=0.3)
        assert len(groups) == 1
        assert groups[0].representative_id == "c1"
        assert groups[0].member_ids == {"c1", "c2", "c3"}

    def test_isolated_candidate_never_grouped(self):
        groups = group_duplicates(CHAIN, threshold=0.3)
        assert all("c4" not in g.member_ids for g in groups)

    def test_no_candidate_in_two_groups(self):
        candidates = CHAIN + [_c("d1", "alfa beta gama"), _c("d2", "alfa beta gama delta")]
        groups = group_duplicates(candidates, threshold=0.3)
        seen = [m for g in groups for m in g.member_ids]
        assert len(seen) == len(set(seen))
        assert len(groups) == 2

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_order_independent(self, seed):
        shuffled = list(CHAIN)
        random.Random(seed).shuffle(shuffled)
        assert group_duplicates(shuffled, threshold=0.3) == group_duplicates(
            CHAIN, threshold=0.3
        )
        assert group_duplicates(list(reversed(CHAIN)), threshold=0.3) == group_duplicates(
            CHAIN, threshold=0.3
        )

    def test_groups_sorted_by_representative(self):
        candidates = [
            _c("m2", "alfa beta gama"),
            _c("m1", "alfa beta gama"),
            _c("k2", "sigma tau ipsilon"),
            _c("k1", "sigma tau ipsilon"),
        ]
        assert [g.representative_id for g in group_duplicates(candidates)] == ["k1", "m1"]

    def test_min_length_excludes_short_texts(self):
        candidates = [_c("a", "ver mapa"), _c("b", "ver mapa")]
        assert group_duplicates(candidates, min_length=20) == []
        assert len(group_duplicates(candidates)) == 1

    def test_untokenizable_texts_ignored(self):
        assert group_duplicates([_c("a", "- . -"), _c("b", "- . -")]) == []

    def test_repeated_id_with_different_texts_is_order_independent(self):
        candidates = [_c("a", "zeta eta theta"), _c("a", "alfa beta gama"), _c("b", "alfa beta gama")]
        forward = group_duplicates(candidates)
        assert forward == group_duplicates(list(reversed(candidates)))
        assert _partition(forward) == {frozenset({"a", "b"})}

    def test_repeated_id_counted_once(self):
        assert group_duplicates([_c("a", "alfa beta"), _c("a", "alfa beta")]) == []


def test_normalize_text():
    assert normalize_text("  El “Sistema”,  DEBE\tvalidar! ") == "el sistema debe validar"


def test_review_eligible_maps_reviewable_candidates():
    candidates = [
        RequirementCandidate("d:1", "d", "Debe validar", 0.9, CandidateStatus.draft),
        RequirementCandidate("d:2", "d", "Debe avisar", 0.2, CandidateStatus.low_confidence),
    ]
    assert review_eligible(candidates) == [
        DedupeCandidate("d:1", "Debe validar"),
        DedupeCandidate("d:2", "Debe avisar"),
    ]


@pytest.mark.parametrize(
    "status,expected",
    [
        (CandidateStatus.draft, True),
        ("low_confidence", True),
        (None, True),
        ("approved", False),
        ("rejected", False),
    ],
)
def test_is_reviewable(status, expected):
    assert is_reviewable(status) is expected


def test_review_eligible_skips_reviewed_records():
    records = [
        SimpleNamespace(id="1", text="Debe validar", status="draft"),
        SimpleNamespace(id="2", text="Debe avisar", status="approved"),
        SimpleNamespace(id="3", text="Debe exportar", status=None),
    ]
    assert [c.id for c in review_eligible(records)] == ["1", "3"]
