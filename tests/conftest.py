"""Shared fixtures: small build step trees shaped like an Xcode build log."""

import pytest

from xcforge_engine.build_step import BuildStep, BuildStepType


def make_step(identifier, kind, parent="", signature="", warnings=0, errors=0, sub_steps=None, **kwargs):
    return BuildStep(
        identifier=identifier,
        step_kind=kind,
        parent_identifier=parent,
        build_identifier="build-1",
        signature=signature,
        warning_count=warnings,
        error_count=errors,
        sub_steps=sub_steps or [],
        **kwargs,
    )


@pytest.fixture
def step_factory():
    return make_step


@pytest.fixture
def three_level_tree():
    """main -> 2 targets -> {2, 1} detail steps."""
    app_details = [
        make_step("build-1_2", BuildStepType.DETAIL, "build-1_1", "CompileC /src/main.m normal arm64", warnings=1),
        make_step("build-1_3", BuildStepType.DETAIL, "build-1_1", "Ld /build/App normal arm64", warnings=2, errors=1),
    ]
    kit_details = [
        make_step("build-1_5", BuildStepType.DETAIL, "build-1_4", "CompileSwiftSources normal arm64", errors=2),
    ]
    targets = [
        make_step("build-1_1", BuildStepType.TARGET, "build-1_0", title="Build target App", sub_steps=app_details),
        make_step("build-1_4", BuildStepType.TARGET, "build-1_0", title="Build target Kit", sub_steps=kit_details),
    ]
    return make_step(
        "build-1_0", BuildStepType.MAIN, title="Build App", schema="App",
        build_status="succeeded", duration=42.5, sub_steps=targets,
    )


@pytest.fixture
def four_level_tree(three_level_tree):
    """Adds two children under the first detail step; the first of those has a child of its own."""
    detail = three_level_tree.sub_steps[0].sub_steps[0]
    level_five = make_step("build-1_8", BuildStepType.DETAIL, "build-1_6", "CpResource a.png b.png")
    detail.sub_steps = [
        make_step("build-1_6", BuildStepType.DETAIL, "build-1_2", "WriteAuxiliaryFile x.hmap", sub_steps=[level_five]),
        make_step("build-1_7", BuildStepType.DETAIL, "build-1_2", "Libtool libKit.a normal"),
    ]
    return three_level_tree
