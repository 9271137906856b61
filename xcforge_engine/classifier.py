from typing import Tuple

from .build_step import DetailStepType

# Checked in order, first match wins. The trailing space keeps "CompileC "
# from matching "CompileCoreData ...".
DETAIL_STEP_PREFIXES: Tuple[Tuple[str, DetailStepType], ...] = (
    ("CompileC ", DetailStepType.C_COMPILATION),
    ("CompileSwift ", DetailStepType.SWIFT_COMPILATION),
    ("Ld ", DetailStepType.LINKER),
    ("PhaseScriptExecution ", DetailStepType.SCRIPT_EXECUTION),
    ("Libtool ", DetailStepType.CREATE_STATIC_LIBRARY),
    ("CopySwiftLibs ", DetailStepType.COPY_SWIFT_LIBS),
    ("CompileAssetCatalog", DetailStepType.COMPILE_ASSETS_CATALOG),
    ("CompileStoryboard ", DetailStepType.COMPILE_STORYBOARD),
    ("WriteAuxiliaryFile ", DetailStepType.WRITE_AUXILIARY_FILE),
    ("LinkStoryboards ", DetailStepType.LINK_STORYBOARDS),
    ("CpResource ", DetailStepType.COPY_RESOURCE_FILE),
    ("MergeSwiftModule ", DetailStepType.MERGE_SWIFT_MODULE),
    ("CompileXIB ", DetailStepType.XIB_COMPILATION),
    ("CompileSwiftSources ", DetailStepType.SWIFT_AGGREGATED_COMPILATION),
    ("PrecompileSwiftBridgingHeader ", DetailStepType.PRECOMPILE_BRIDGING_HEADER),
)

def get_detail_type(signature: str) -> DetailStepType:
    """Returns the category of a detail step based on the prefix of its signature."""
    for prefix, detail_type in DETAIL_STEP_PREFIXES:
        if signature.startswith(prefix):
            return detail_type
    return DetailStepType.OTHER
