"""Tests for the rotation selector."""

import logging
import random
from collections import Counter
from types import SimpleNamespace

import pytest

from coldcall.exceptions import InvalidRotationToken, NoEligibleStudents
from coldcall.models import Rotation
from coldcall.selection import RotationSelector, as_rotation


def make_student(id, rotation="A", exclude=False):
    return SimpleNamespace(id=id, rotation=rotation, exclude=exclude)


def commit(classroom, pick):
    """Apply a pick the way the roster store does."""
    if pick.class_flipped:
        classroom.rotation = pick.class_rotation
    pick.student.rotation = pick.student_rotation


@pytest.fixture
def selector():
    return RotationSelector(rng=random.Random(1234))


@pytest.fixture
def scenario():
    """Class on A; students 1 and 2 on A, student 3 on B."""
    classroom = SimpleNamespace(id="c1", rotation="A")
    roster = [make_student(1, "A"), make_student(2, "A"), make_student(3, "B")]
    return classroom, roster


class TestRotation:

    def test_opposite(self):
        assert Rotation.A.opposite is Rotation.B
        assert Rotation.B.opposite is Rotation.A

    def test_as_rotation_accepts_tokens(self):
        assert as_rotation("A") is Rotation.A
        assert as_rotation(Rotation.B) is Rotation.B

    @pytest.mark.parametrize("value", ["C", "a", "", None, 1])
    def test_as_rotation_rejects_other_values(self, value):
        with pytest.raises(InvalidRotationToken):
            as_rotation(value)


class TestListEligible:

    @pytest.mark.parametrize("rotation", ["A", "B"])
    def test_matches_rotation_and_not_excluded(self, selector, rotation):
        roster = [
            make_student(1, "A"),
            make_student(2, "B"),
            make_student(3, "A", exclude=True),
            make_student(4, "B", exclude=True),
            make_student(5, "B"),
        ]
        expected = {s.id for s in roster if not s.exclude and s.rotation == rotation}

        eligible = selector.list_eligible(rotation, roster)

        assert {s.id for s in eligible} == expected

    def test_never_flips_on_empty_pool(self, selector):
        roster = [make_student(1, "B"), make_student(2, "B")]

        assert selector.list_eligible("A", roster) == []
        assert [s.rotation for s in roster] == ["B", "B"]

    def test_rejects_invalid_student_token(self, selector):
        roster = [make_student(1, "A"), make_student(2, "X", exclude=True)]

        with pytest.raises(InvalidRotationToken):
            selector.list_eligible("A", roster)


class TestPickOne:

    def test_does_not_mutate_roster(self, selector, scenario):
        classroom, roster = scenario

        selector.pick_one(classroom.rotation, roster)

        assert [s.rotation for s in roster] == ["A", "A", "B"]

    def test_concrete_scenario(self, selector, scenario):
        classroom, roster = scenario

        first = selector.pick_one(classroom.rotation, roster)
        assert first.student.id in (1, 2)
        assert first.student_rotation is Rotation.B
        assert first.class_flipped is False
        commit(classroom, first)

        second = selector.pick_one(classroom.rotation, roster)
        assert second.student.id in (1, 2)
        assert second.student.id != first.student.id
        commit(classroom, second)

        # Both A students used up: the class moves to B and everyone on B is eligible
        assert selector.list_eligible(classroom.rotation, roster) == []
        third = selector.pick_one(classroom.rotation, roster)
        assert third.class_flipped is True
        assert third.class_rotation is Rotation.B
        assert third.student.id in (1, 2, 3)
        assert third.student_rotation is Rotation.A

    def test_no_immediate_repeat(self, selector):
        classroom = SimpleNamespace(rotation="A")
        roster = [make_student(i) for i in range(6)]

        for _ in range(50):
            pick = selector.pick_one(classroom.rotation, roster)
            commit(classroom, pick)
            eligible = selector.list_eligible(classroom.rotation, roster)
            assert pick.student not in eligible

    def test_each_student_picked_once_per_half_cycle(self, selector):
        classroom = SimpleNamespace(rotation="A")
        roster = [make_student(i) for i in range(5)]

        picked = []
        for _ in range(5):
            pick = selector.pick_one(classroom.rotation, roster)
            assert pick.class_flipped is False
            commit(classroom, pick)
            picked.append(pick.student.id)

        assert sorted(picked) == [0, 1, 2, 3, 4]

        # Sixth pick starts the next half-cycle
        pick = selector.pick_one(classroom.rotation, roster)
        assert pick.class_flipped is True
        assert pick.class_rotation is Rotation.B

    def test_exhaustion_flips_exactly_once(self, selector):
        roster = [
            make_student(1, "B"),
            make_student(2, "B"),
            make_student(3, "A", exclude=True),
        ]

        pick = selector.pick_one("A", roster)

        assert pick.class_flipped is True
        assert pick.class_rotation is Rotation.B
        assert pick.student.id in (1, 2)
        assert pick.student_rotation is Rotation.A

    def test_double_exhaustion_raises(self, selector):
        roster = [make_student(1, "A", exclude=True), make_student(2, "B", exclude=True)]

        with pytest.raises(NoEligibleStudents):
            selector.pick_one("A", roster)

        assert [s.rotation for s in roster] == ["A", "B"]

    def test_flip_logged_only_when_it_happens(self, selector, caplog):
        caplog.set_level(logging.INFO, logger="coldcall.selection.selector")
        excluded = [make_student(1, "A", exclude=True), make_student(2, "B", exclude=True)]

        with pytest.raises(NoEligibleStudents):
            selector.pick_one("A", excluded)
        assert "flipping" not in caplog.text

        selector.pick_one("A", [make_student(3, "B")])
        assert "flipping class token to B" in caplog.text

    def test_empty_roster_raises(self, selector):
        with pytest.raises(NoEligibleStudents):
            selector.pick_one("B", [])

    def test_exclusion_is_sticky(self, selector):
        classroom = SimpleNamespace(rotation="A")
        excluded = make_student("x", "A", exclude=True)
        roster = [make_student(1), make_student(2, "B"), excluded, make_student(3)]

        flips = 0
        for _ in range(40):
            pick = selector.pick_one(classroom.rotation, roster)
            flips += pick.class_flipped
            assert pick.student is not excluded
            assert excluded not in selector.list_eligible(classroom.rotation, roster)
            commit(classroom, pick)

        assert flips > 1

        excluded.exclude = False
        pool = selector.list_eligible(excluded.rotation, roster)
        assert excluded in pool

    def test_student_added_mid_cycle_is_eligible(self, selector):
        classroom = SimpleNamespace(rotation="B")
        roster = [make_student(1, "B"), make_student(2, "B")]
        commit(classroom, selector.pick_one(classroom.rotation, roster))

        newcomer = make_student(3, classroom.rotation)
        roster.append(newcomer)

        assert newcomer in selector.list_eligible(classroom.rotation, roster)

    def test_invalid_class_token(self, selector, scenario):
        _, roster = scenario

        with pytest.raises(InvalidRotationToken):
            selector.pick_one("C", roster)

    def test_uniform_over_eligible_pool(self, selector):
        roster = [make_student(i) for i in range(4)] + [make_student(9, "B")]
        trials = 8000

        counts = Counter(selector.pick_one("A", roster).student.id for _ in range(trials))

        assert set(counts) == {0, 1, 2, 3}
        for student_id in range(4):
            assert counts[student_id] / trials == pytest.approx(0.25, abs=0.03)

    def test_seeded_sources_repeat(self, scenario):
        _, roster = scenario

        first = RotationSelector(rng=random.Random(42)).pick_one("A", roster)
        second = RotationSelector(rng=random.Random(42)).pick_one("A", roster)

        assert first.student is second.student

    def test_default_source(self, scenario):
        _, roster = scenario

        pick = RotationSelector().pick_one("A", roster)

        assert pick.student.id in (1, 2)
