import copy
import dataclasses
from typing import List

from .build_step import BuildStep

def _without_sub_steps(step: BuildStep) -> BuildStep:
    return copy.deepcopy(dataclasses.replace(step, sub_steps=[]))

def flatten(root: BuildStep) -> List[BuildStep]:
    """
    Traverses a tree of BuildSteps and returns it as a list, in document order.
    Used by reporters because a list is easier to handle than a tree.

    This is iterative on purpose, so only the first 3 levels of the tree
    (main, target, detail) come out without sub_steps. Children of a detail
    step are appended right after it as they are, keeping their own sub_steps.
    The input tree is left untouched.
    """
    steps = [_without_sub_steps(root)]
    for sub_step in root.sub_steps:
        steps.extend(flatten_sub_step(sub_step))
    return steps

def flatten_sub_step(sub_step: BuildStep) -> List[BuildStep]:
    details = [_without_sub_steps(sub_step)]
    for detail in sub_step.sub_steps:
        details.append(_without_sub_steps(detail))
        if detail.sub_steps:
            details.extend(copy.deepcopy(detail.sub_steps))
    return details
