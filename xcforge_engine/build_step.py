from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any
from enum import Enum

class BuildStepType(Enum):
    MAIN = "main" # The whole build
    TARGET = "target" # One build target
    DETAIL = "detail" # One concrete action within a target, categorised by DetailStepType


class DetailStepType(Enum):
    C_COMPILATION = "cCompilation"
    SWIFT_COMPILATION = "swiftCompilation"
    SCRIPT_EXECUTION = "scriptExecution" # Build phase shell script
    CREATE_STATIC_LIBRARY = "createStaticLibrary" # Libtool
    LINKER = "linker"
    COPY_SWIFT_LIBS = "copySwiftLibs" # Swift runtime copied into the bundle
    COMPILE_ASSETS_CATALOG = "compileAssetsCatalog"
    COMPILE_STORYBOARD = "compileStoryboard"
    WRITE_AUXILIARY_FILE = "writeAuxiliaryFile"
    LINK_STORYBOARDS = "linkStoryboards"
    COPY_RESOURCE_FILE = "copyResourceFile"
    MERGE_SWIFT_MODULE = "mergeSwiftModule"
    XIB_COMPILATION = "xibCompilation"
    SWIFT_AGGREGATED_COMPILATION = "swiftAggregatedCompilation" # xcodebuild reports swift files aggregated
    PRECOMPILE_BRIDGING_HEADER = "precompileBridgingHeader"
    OTHER = "other" # Detail step that matched no known signature
    NONE = "none" # Steps that are not of type detail


def _enum_value(enum_cls, raw, field_name: str):
    try:
        return enum_cls(raw)
    except ValueError:
        raise ValueError(f"Invalid '{field_name}' value '{raw}'. Expected one of: {[e.value for e in enum_cls]}")

def _record_list(data: dict, key: str, nullable: bool):
    raw = data.get(key, None if nullable else [])
    if raw is None and nullable:
        return None
    if not isinstance(raw, list):
        raise ValueError(f"'{key}' must be a list. Found type: {type(raw)}")
    return raw

def _check_record(data, record_name: str):
    if not isinstance(data, dict):
        raise ValueError(f"{record_name} record must be an object. Found type: {type(data)}")


@dataclass
class Notice:
    """A diagnostic (note, warning or error) attached to a step."""
    type: str # e.g., "note", "clangWarning", "swiftError"
    title: str
    clang_flag: Optional[str] = None # e.g., "[-Wunused-variable]"
    document_url: str = ""
    severity: int = 0
    starting_line_number: int = 0
    ending_line_number: int = 0
    starting_column_number: int = 0
    ending_column_number: int = 0
    character_range_start: int = 0
    character_range_end: int = 0
    detail: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "title": self.title,
            "clangFlag": self.clang_flag,
            "documentURL": self.document_url,
            "severity": self.severity,
            "startingLineNumber": self.starting_line_number,
            "endingLineNumber": self.ending_line_number,
            "startingColumnNumber": self.starting_column_number,
            "endingColumnNumber": self.ending_column_number,
            "characterRangeStart": self.character_range_start,
            "characterRangeEnd": self.character_range_end,
            "detail": self.detail,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Notice':
        _check_record(data, "Notice")
        if 'type' not in data or 'title' not in data:
            raise ValueError(f"Notice record must contain 'type' and 'title'. Found: {list(data.keys())}")
        return cls(
            type=data['type'],
            title=data['title'],
            clang_flag=data.get('clangFlag'),
            document_url=data.get('documentURL', ""),
            severity=data.get('severity', 0),
            starting_line_number=data.get('startingLineNumber', 0),
            ending_line_number=data.get('endingLineNumber', 0),
            starting_column_number=data.get('startingColumnNumber', 0),
            ending_column_number=data.get('endingColumnNumber', 0),
            character_range_start=data.get('characterRangeStart', 0),
            character_range_end=data.get('characterRangeEnd', 0),
            detail=data.get('detail'),
        )


@dataclass
class FunctionTime:
    """Compile time of one Swift function body, as reported by -debug-time-function-bodies."""
    file: str
    duration_ms: float
    starting_line: int
    starting_column: int
    signature: str
    occurrences: int = 1

    def to_dict(self) -> dict:
        return {
            "file": self.file,
            "durationMS": self.duration_ms,
            "startingLine": self.starting_line,
            "startingColumn": self.starting_column,
            "signature": self.signature,
            "occurrences": self.occurrences,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'FunctionTime':
        _check_record(data, "Function time")
        missing = [k for k in ('file', 'durationMS', 'startingLine', 'startingColumn', 'signature') if k not in data]
        if missing:
            raise ValueError(f"Function time record is missing required fields: {missing}")
        return cls(
            file=data['file'],
            duration_ms=data['durationMS'],
            starting_line=data['startingLine'],
            starting_column=data['startingColumn'],
            signature=data['signature'],
            occurrences=data.get('occurrences', 1),
        )


@dataclass
class BuildStep:
    """
    One node of a build result tree.

    The root is of type MAIN (the whole build), its children are TARGETs and
    their children are DETAIL steps (compilations, links, scripts...).
    Every step in sub_steps has this step's identifier as its parent_identifier.

    For MAIN and TARGET steps, warning_count and error_count are the totals of
    all descendant detail steps. For DETAIL steps they count the step's own issues.

    start_timestamp is not guaranteed to be after the parent's: copyResourceFile
    steps served from cache report an earlier timestamp than their target.
    """
    identifier: str
    step_kind: BuildStepType
    parent_identifier: str = "" # Empty for the MAIN step
    build_identifier: str = ""
    machine_name: str = ""
    domain: str = "" # e.g., "com.apple.dt.IDE.BuildLogSection"
    title: str = "" # For detail steps, usually the compiled file
    signature: str = "" # Raw command description, used to derive detail_category
    schema: str = ""
    architecture: str = "" # Compilation steps only, e.g., "arm64"
    document_url: str = ""
    build_status: str = "" # e.g., "succeeded", "failed"
    start_date: str = ""  # ISO 8601
    end_date: str = ""  # ISO 8601
    start_timestamp: int = 0 # Unix epoch seconds
    end_timestamp: int = 0
    duration: float = 0.0 # Seconds. For MAIN, the duration of the whole build
    detail_category: DetailStepType = DetailStepType.NONE
    warning_count: int = 0
    error_count: int = 0
    notes: Optional[List[Notice]] = None
    swift_function_times: Optional[List[FunctionTime]] = None # Only when function timing was enabled
    sub_steps: List['BuildStep'] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "identifier": self.identifier,
            "parentIdentifier": self.parent_identifier,
            "buildIdentifier": self.build_identifier,
            "stepKind": self.step_kind.value, # Store enum value as string
            "detailCategory": self.detail_category.value,
            "machineName": self.machine_name,
            "domain": self.domain,
            "title": self.title,
            "signature": self.signature,
            "schema": self.schema,
            "architecture": self.architecture,
            "documentURL": self.document_url,
            "buildStatus": self.build_status,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "startTimestamp": self.start_timestamp,
            "endTimestamp": self.end_timestamp,
            "duration": self.duration,
            "warningCount": self.warning_count,
            "errorCount": self.error_count,
            "notes": [n.to_dict() for n in self.notes] if self.notes is not None else None,
            "swiftFunctionTimes": [t.to_dict() for t in self.swift_function_times] if self.swift_function_times is not None else None,
            "subSteps": [s.to_dict() for s in self.sub_steps],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BuildStep':
        _check_record(data, "Build step")
        if 'identifier' not in data or 'stepKind' not in data:
            raise ValueError(f"Build step record must contain 'identifier' and 'stepKind'. Found: {list(data.keys())}")

        notes_data = _record_list(data, 'notes', nullable=True)
        times_data = _record_list(data, 'swiftFunctionTimes', nullable=True)

        return cls(
            identifier=data['identifier'],
            step_kind=_enum_value(BuildStepType, data['stepKind'], 'stepKind'),
            parent_identifier=data.get('parentIdentifier', ""),
            build_identifier=data.get('buildIdentifier', ""),
            machine_name=data.get('machineName', ""),
            domain=data.get('domain', ""),
            title=data.get('title', ""),
            signature=data.get('signature', ""),
            schema=data.get('schema', ""),
            architecture=data.get('architecture', ""),
            document_url=data.get('documentURL', ""),
            build_status=data.get('buildStatus', ""),
            start_date=data.get('startDate', ""),
            end_date=data.get('endDate', ""),
            start_timestamp=data.get('startTimestamp', 0),
            end_timestamp=data.get('endTimestamp', 0),
            duration=data.get('duration', 0.0),
            detail_category=_enum_value(DetailStepType, data.get('detailCategory', "none"), 'detailCategory'),
            warning_count=data.get('warningCount', 0),
            error_count=data.get('errorCount', 0),
            notes=[Notice.from_dict(n) for n in notes_data] if notes_data is not None else None,
            swift_function_times=[FunctionTime.from_dict(t) for t in times_data] if times_data is not None else None,
            sub_steps=[cls.from_dict(s) for s in _record_list(data, 'subSteps', nullable=False)],
        )
