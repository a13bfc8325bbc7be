"""
Walk domain: value types, the walk state machine, persistence ports and
adjacency grouping.
"""

from schema_walker.walk.exceptions import (
    RecordDecodeError,
    WalkDecodeError,
    WalkError,
)
from schema_walker.walk.models import (
    AdjacencyRecord,
    CandidateSelection,
    Direction,
    NodePick,
    Operator,
    PropertySelection,
    RelationshipPick,
    Step,
    Walk,
    WalkStatus,
)
from schema_walker.walk.grouping import (
    GroupedAdjacency,
    group_by_type,
    split_by_direction,
)
from schema_walker.walk.manager import WalkManager, decode_walk
from schema_walker.walk.store import FileWalkStore, InMemoryWalkStore, WalkStore

__all__ = [
    # Exceptions
    "WalkError",
    "WalkDecodeError",
    "RecordDecodeError",
    # Models
    "AdjacencyRecord",
    "CandidateSelection",
    "Direction",
    "NodePick",
    "Operator",
    "PropertySelection",
    "RelationshipPick",
    "Step",
    "Walk",
    "WalkStatus",
    # Grouping
    "GroupedAdjacency",
    "group_by_type",
    "split_by_direction",
    # State machine and persistence
    "WalkManager",
    "decode_walk",
    "FileWalkStore",
    "InMemoryWalkStore",
    "WalkStore",
]
