from .backward import backward, solve
from .forward import forward
from .iterate import (
    iterate_backward, iterate_forward, insert_if_absent,
    synthesize_lemmas, prove_with_lemmas, OPEN_QUERY,
)
from .control import (
    Control, controlled_backward, depth_control, depth_and_target_control,
    theorem_terminator, combine_terminators, nested_terminator,
    nested_depth_control, peano,
)

__all__ = [
    "backward", "solve", "forward",
    "iterate_backward", "iterate_forward", "insert_if_absent",
    "synthesize_lemmas", "prove_with_lemmas", "OPEN_QUERY",
    "Control", "controlled_backward", "depth_control", "depth_and_target_control",
    "theorem_terminator", "combine_terminators", "nested_terminator",
    "nested_depth_control", "peano",
]
