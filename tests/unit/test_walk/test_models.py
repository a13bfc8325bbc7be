"""
Unit tests for walk value types.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from schema_walker.walk.models import (
    CandidateSelection,
    Direction,
    NodePick,
    PropertySelection,
    RelationshipPick,
    Step,
    Walk,
    WalkStatus,
    to_text,
)


class TestToText:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, "null"),
            (True, "true"),
            (False, "false"),
            (30, "30"),
            (2.5, "2.5"),
            ("Ann", "Ann"),
            (["Neo", "Trinity"], "Neo,Trinity"),
            ([1, True, None], "1,true,null"),
        ],
    )
    def test_driver_values(self, value: object, expected: str) -> None:
        assert to_text(value) == expected


class TestPropertySelection:
    def test_defaults_to_equality(self) -> None:
        selection = PropertySelection(name="age", value="30")

        assert str(selection) == "age = 30"

    def test_empty_name_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PropertySelection(name="", value="x")

    def test_is_immutable(self) -> None:
        selection = PropertySelection(name="age", value="30")

        with pytest.raises(ValidationError):
            selection.value = "31"  # type: ignore[misc]

    def test_equal_selections_hash_equal(self) -> None:
        a = PropertySelection.from_value("age", 30)
        b = PropertySelection(name="age", value="30")

        assert a == b
        assert hash(a) == hash(b)


class TestCandidateSelection:
    """Tests for the scratch selection of the next step."""

    def test_not_ready_without_label(self) -> None:
        assert not CandidateSelection().is_ready
        assert CandidateSelection(label="Person").is_ready

    def test_changing_label_drops_filters(self) -> None:
        candidate = CandidateSelection(label="Person").with_property("age", 30)

        switched = candidate.with_label("Company")

        assert switched.label == "Company"
        assert switched.properties == ()

    def test_with_property_appends_in_order(self) -> None:
        candidate = (
            CandidateSelection(label="Person")
            .with_property("name", "Ann")
            .with_property("age", 30)
        )

        assert [p.name for p in candidate.properties] == ["name", "age"]
        assert candidate.properties[1].value == "30"

    def test_without_property(self) -> None:
        candidate = CandidateSelection(label="Person").with_property("name", "Ann")

        assert candidate.without_property("name").properties == ()
        assert candidate.without_property("missing") == candidate

    def test_to_node_pick(self) -> None:
        candidate = CandidateSelection(label="Person").with_property("name", "Ann")

        pick = candidate.to_node_pick()

        assert pick == NodePick(label="Person", properties=candidate.properties)


class TestWalk:
    """Tests for Walk append/truncate semantics."""

    def test_empty_walk_status(self) -> None:
        assert Walk().status is WalkStatus.EMPTY

    def test_append_returns_new_walk(self, knows_step: Step) -> None:
        walk = Walk()

        extended = walk.append(knows_step)

        assert walk.steps == ()
        assert extended.steps == (knows_step,)
        assert extended.status is WalkStatus.IN_PROGRESS

    def test_truncate_drops_index_and_later(self, two_step_walk: Walk, knows_step: Step) -> None:
        assert two_step_walk.truncate(1).steps == (knows_step,)
        assert two_step_walk.truncate(0).status is WalkStatus.EMPTY

    def test_truncate_past_end_is_noop(self, two_step_walk: Walk) -> None:
        assert two_step_walk.truncate(5) == two_step_walk

    def test_truncate_negative_raises(self, two_step_walk: Walk) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            two_step_walk.truncate(-1)

    def test_json_round_trip_preserves_walk(self, two_step_walk: Walk) -> None:
        assert Walk.model_validate_json(two_step_walk.model_dump_json()) == two_step_walk

    def test_direction_serializes_as_name(self, knows_step: Step) -> None:
        data = Walk(steps=(knows_step,)).model_dump(mode="json")

        assert data["steps"][0]["direction"] == "outbound"

    def test_step_direction_flag(self) -> None:
        step = Step(
            relationship=RelationshipPick(type_name="OWNS"),
            direction=Direction.from_inbound(True),
            origin_node=NodePick(label="Car"),
        )

        assert step.is_inbound
