"""
Conditional visibility: which fields are shown for the current value map.
"""

from .coercion import compare_ordered, evaluate_condition, loose_equals, to_number, to_text  # noqa: F401
from .evaluator import compute_visibility, evaluate_visibility  # noqa: F401
