"""Graph operations: consistency checking and model assembly."""

from req2uml.graph_ops.assembler import assemble_model, named_edges
from req2uml.graph_ops.consistency import check_consistency, find_inheritance_cycles

__all__ = [
    "assemble_model",
    "check_consistency",
    "find_inheritance_cycles",
    "named_edges",
]
