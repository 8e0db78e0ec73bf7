"""Two-tier recovery of JSON values from generator text."""

from req2uml.repair.exceptions import RepairFailure
from req2uml.repair.text_repair import apply_targeted_fixes, repair_json, strip_code_fence

__all__ = [
    "RepairFailure",
    "apply_targeted_fixes",
    "repair_json",
    "strip_code_fence",
]
