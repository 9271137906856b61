from collections import Counter
from typing import Dict, Iterator, Tuple

from .build_step import BuildStep, BuildStepType, DetailStepType
from .classifier import get_detail_type
from .logger_setup import logger

def iter_steps(root: BuildStep) -> Iterator[BuildStep]:
    """Yields every step of the tree in pre-order, root first."""
    stack = [root]
    while stack:
        step = stack.pop()
        yield step
        stack.extend(reversed(step.sub_steps))

def apply_classification(root: BuildStep) -> BuildStep:
    """Sets detail_category on every step: derived from the signature for detail steps, NONE otherwise."""
    classified = 0
    for step in iter_steps(root):
        if step.step_kind is BuildStepType.DETAIL:
            step.detail_category = get_detail_type(step.signature)
            classified += 1
        else:
            step.detail_category = DetailStepType.NONE
    logger.debug(f"Classified {classified} detail steps of build {root.build_identifier or root.identifier}")
    return root

def _detail_totals(root: BuildStep) -> Tuple[int, int]:
    # Post-order walk with an explicit stack; totals maps id(step) to the
    # warnings and errors of its descendant detail steps.
    totals: Dict[int, Tuple[int, int]] = {}
    stack = [(root, False)]
    while stack:
        step, children_done = stack.pop()
        if not children_done:
            stack.append((step, True))
            stack.extend((sub_step, False) for sub_step in step.sub_steps)
            continue
        warnings = 0
        errors = 0
        for sub_step in step.sub_steps:
            sub_warnings, sub_errors = totals.pop(id(sub_step))
            if sub_step.step_kind is BuildStepType.DETAIL:
                warnings += sub_step.warning_count
                errors += sub_step.error_count
            warnings += sub_warnings
            errors += sub_errors
        if step.step_kind is not BuildStepType.DETAIL:
            step.warning_count = warnings
            step.error_count = errors
        totals[id(step)] = (warnings, errors)
    return totals[id(root)]

def roll_up_counts(root: BuildStep) -> BuildStep:
    """
    Sets warning_count and error_count of every main and target step to the
    sum over its descendant detail steps. Detail steps keep their own counts.
    """
    warnings, errors = _detail_totals(root)
    logger.debug(f"Rolled up {warnings} warnings and {errors} errors into {root.identifier}")
    return root

def count_by_category(root: BuildStep) -> Counter:
    return Counter(step.detail_category for step in iter_steps(root) if step.step_kind is BuildStepType.DETAIL)
