import json
from pathlib import Path
from typing import List, Optional, Union

from .build_step import BuildStep
from .logger_setup import logger

def steps_to_json(steps: List[BuildStep], indent: Optional[int] = 2) -> str:
    """Encodes a list of steps (usually the output of flatten) as a JSON array, one record per step."""
    return json.dumps([step.to_dict() for step in steps], indent=indent)

def steps_from_json(raw_json: str) -> List[BuildStep]:
    try:
        data = json.loads(raw_json)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in step report: {e}")
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise ValueError(f"Step report must be a list of build steps or a single build step. Found type: {type(data)}")
    return [BuildStep.from_dict(record) for record in data]

def dump_steps(file_path: Union[str, Path], steps: List[BuildStep], indent: Optional[int] = 2):
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "w", encoding="utf-8") as f:
        f.write(steps_to_json(steps, indent=indent))
    logger.info(f"Wrote {len(steps)} build steps to {file_path}")

def load_tree(file_path: Union[str, Path]) -> BuildStep:
    """Reads the root step of a build tree from a JSON file holding one step object or a one-element list."""
    file_path = Path(file_path)
    with open(file_path, "r", encoding="utf-8") as f:
        steps = steps_from_json(f.read())
    if len(steps) != 1:
        raise ValueError(f"Expected a single root build step in {file_path.name}, found {len(steps)}.")
    logger.debug(f"Loaded build tree {steps[0].identifier} from {file_path}")
    return steps[0]
