"""
Unit tests for walk path compilation.
"""

from __future__ import annotations

from schema_walker.cypher.prefix import compile_prefix, node_pattern
from schema_walker.walk.models import (
    Direction,
    NodePick,
    PropertySelection,
    RelationshipPick,
    Step,
    Walk,
)


class TestCompilePrefix:
    """Tests for compile_prefix()."""

    def test_empty_walk_is_bare_match(self) -> None:
        assert compile_prefix(Walk()) == "MATCH "

    def test_outbound_step_puts_arrow_on_the_right(self, knows_step: Step) -> None:
        prefix = compile_prefix(Walk(steps=(knows_step,)))

        assert prefix == "MATCH (:`Person`)-[:KNOWS]->"

    def test_inbound_step_puts_arrow_on_the_left(self, works_at_step: Step) -> None:
        prefix = compile_prefix(Walk(steps=(works_at_step,)))

        assert prefix == "MATCH (:`Person`{name: 'Ann'})<-[:WORKS_AT{since: 2020}]-"

    def test_steps_concatenate_without_separator(self, two_step_walk: Walk) -> None:
        prefix = compile_prefix(two_step_walk)

        assert prefix == (
            "MATCH (:`Person`)-[:KNOWS]->"
            "(:`Person`{name: 'Ann'})<-[:WORKS_AT{since: 2020}]-"
        )

    def test_compilation_is_deterministic(self, two_step_walk: Walk) -> None:
        rebuilt = Walk.model_validate_json(two_step_walk.model_dump_json())

        assert compile_prefix(two_step_walk) == compile_prefix(two_step_walk)
        assert compile_prefix(rebuilt) == compile_prefix(two_step_walk)

    def test_property_order_is_insertion_order(self) -> None:
        step = Step(
            relationship=RelationshipPick(type_name="R"),
            direction=Direction.OUTBOUND,
            origin_node=NodePick(
                label="A",
                properties=(
                    PropertySelection(name="z", value="1"),
                    PropertySelection(name="a", value="x"),
                ),
            ),
        )

        assert compile_prefix(Walk(steps=(step,))) == "MATCH (:`A`{z: 1, a: 'x'})-[:R]->"


class TestNodePattern:
    def test_focal_node_with_variable(self) -> None:
        pattern = node_pattern("Person", (PropertySelection(name="age", value="30"),), variable="n")

        assert pattern == "(n:`Person`{age: 30})"
