"""
Step State Machine Tests

Mandatory test coverage:
- go_next / go_back move exactly one position
- go_to_step: backward, already-complete, or immediate next when leavable
- Required incomplete steps block forward navigation; optional steps do not
- Completion re-evaluated against the live draft (never cached)
- Monotonic completion under additive edits
- Nothing raises on unknown step ids
"""

import pytest

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from merchstudio.draft import (
    BrandIdentity,
    ColorLine,
    Draft,
    SelectArchetype,
    SelectBrand,
    SelectMascot,
    SetColorLine,
    SetSelection,
    UpdateCopy,
    WorkflowFlow,
)
from merchstudio.draft.reducer import reduce_all, start_draft
from merchstudio.workflow import (
    AI_ENHANCE,
    BRAND_DESIGN,
    COLOR_LINE,
    CREATIVE_STEPS,
    PRODUCT_SELECT,
    PUBLISH,
    STUDIO_STEPS,
    VARIANT_CONFIG,
    VISUAL_SELECTION,
    StepMachine,
)


@pytest.fixture
def studio():
    return StepMachine.for_flow(WorkflowFlow.STUDIO)


@pytest.fixture
def creative():
    return StepMachine.for_flow(WorkflowFlow.CREATIVE)


@pytest.fixture
def configured_draft():
    """Studio draft with product, variants and brand filled in."""
    return reduce_all(start_draft(WorkflowFlow.STUDIO), [
        SelectArchetype(archetype_id="t-shirt"),
        UpdateCopy(title="Acid Tee"),
        SetSelection(dimension="Size", values=["M"]),
        SelectBrand(brand=BrandIdentity.TECHNO_DOG),
    ])


def at_step(draft: Draft, step_id: str) -> Draft:
    return draft.model_copy(update={"current_step": step_id})


class TestFlows:

    def test_studio_sequence(self):
        assert [s.id for s in STUDIO_STEPS] == [PRODUCT_SELECT, VARIANT_CONFIG, BRAND_DESIGN, AI_ENHANCE, PUBLISH]
        assert [s.number for s in STUDIO_STEPS] == [1, 2, 3, 4, 5]

    def test_creative_sequence(self):
        assert [s.id for s in CREATIVE_STEPS] == [
            BRAND_DESIGN, VISUAL_SELECTION, COLOR_LINE, PRODUCT_SELECT, VARIANT_CONFIG, PUBLISH,
        ]

    def test_optional_steps(self):
        assert [s.id for s in STUDIO_STEPS if not s.required] == [AI_ENHANCE]
        assert [s.id for s in CREATIVE_STEPS if not s.required] == [VISUAL_SELECTION]

    def test_empty_machine_rejected(self):
        with pytest.raises(ValueError):
            StepMachine([])


class TestGoNext:

    def test_blocked_on_incomplete_required_step(self, studio):
        draft = start_draft()
        assert not studio.can_go_next(draft)
        assert studio.go_next(draft) is draft

    def test_moves_one_step_when_complete(self, studio, configured_draft):
        moved = studio.go_next(configured_draft)
        assert moved.current_step == VARIANT_CONFIG

    def test_optional_step_can_be_skipped(self, studio, configured_draft):
        draft = at_step(configured_draft, AI_ENHANCE)
        assert not studio.is_step_complete(AI_ENHANCE, draft)
        assert studio.go_next(draft).current_step == PUBLISH

    def test_terminal_step_has_no_next(self, studio, configured_draft):
        draft = at_step(configured_draft, PUBLISH)
        assert studio.is_terminal(draft)
        assert not studio.can_go_next(draft)
        assert studio.go_next(draft) is draft


class TestGoBack:

    def test_first_step_has_no_back(self, studio):
        draft = start_draft()
        assert not studio.can_go_back(draft)
        assert studio.go_back(draft) is draft

    def test_moves_one_step_back(self, studio, configured_draft):
        draft = at_step(configured_draft, AI_ENHANCE)
        assert studio.go_back(draft).current_step == BRAND_DESIGN


class TestGoToStep:

    def test_backward_jump_always_allowed(self, studio):
        draft = at_step(start_draft(), PUBLISH)
        assert studio.go_to_step(PRODUCT_SELECT, draft).current_step == PRODUCT_SELECT

    def test_jump_to_completed_step(self, studio, configured_draft):
        # brand-design is complete, two steps ahead
        assert studio.go_to_step(BRAND_DESIGN, configured_draft).current_step == BRAND_DESIGN

    def test_cannot_skip_incomplete_required_steps(self, studio):
        draft = reduce_all(start_draft(), [UpdateCopy(title="Acid Tee"), SelectArchetype(archetype_id="t-shirt")])
        # variant-config (next) is reachable, publish is not
        assert studio.can_go_to(VARIANT_CONFIG, draft)
        assert not studio.can_go_to(PUBLISH, draft)
        assert studio.go_to_step(PUBLISH, draft) is draft

    def test_immediate_next_requires_leavable_current(self, studio):
        draft = start_draft()
        assert not studio.can_go_to(VARIANT_CONFIG, draft)

    def test_unknown_step(self, studio, configured_draft):
        assert not studio.can_go_to("checkout", configured_draft)
        assert studio.go_to_step("checkout", configured_draft) is configured_draft
        assert not studio.is_step_complete("checkout", configured_draft)

    def test_step_from_other_flow(self, studio, configured_draft):
        assert not studio.can_go_to(COLOR_LINE, configured_draft)


class TestCompletion:

    def test_product_select_needs_title_and_type(self, studio):
        draft = start_draft()
        assert not studio.is_step_complete(PRODUCT_SELECT, draft)
        draft = reduce_all(draft, [SelectArchetype(archetype_id="hoodie")])
        assert not studio.is_step_complete(PRODUCT_SELECT, draft)
        draft = reduce_all(draft, [UpdateCopy(title="Acid Hoodie")])
        assert studio.is_step_complete(PRODUCT_SELECT, draft)

    def test_completion_tracks_live_draft(self, studio, configured_draft):
        assert studio.is_step_complete(VARIANT_CONFIG, configured_draft)
        cleared = reduce_all(configured_draft, [SetSelection(dimension="Size", values=[])])
        assert not studio.is_step_complete(VARIANT_CONFIG, cleared)

    def test_monotonic_under_additive_edits(self, creative):
        draft = start_draft(WorkflowFlow.CREATIVE)
        edits = [
            SelectBrand(brand=BrandIdentity.TECHNO_DOGGIES),
            SelectMascot(mascot_id="dj-dog", mascot_name="DJ Dog"),
            SetColorLine(color_line=ColorLine.WHITE_LINE),
            UpdateCopy(title="DJ Dog Hoodie"),
            SelectArchetype(archetype_id="hoodie"),
            SetSelection(dimension="Size", values=["M", "L"]),
        ]
        completed = set(creative.completed_steps(draft))
        for edit in edits:
            draft = reduce_all(draft, [edit])
            now = set(creative.completed_steps(draft))
            assert completed <= now
            completed = now
        assert completed == {BRAND_DESIGN, VISUAL_SELECTION, COLOR_LINE, PRODUCT_SELECT, VARIANT_CONFIG}

    def test_techno_dog_needs_no_mascot_or_color_line(self, creative):
        draft = reduce_all(start_draft(WorkflowFlow.CREATIVE), [SelectBrand(brand=BrandIdentity.TECHNO_DOG)])
        assert creative.is_step_complete(VISUAL_SELECTION, draft)
        assert creative.is_step_complete(COLOR_LINE, draft)

    def test_crashing_predicate_is_incomplete(self, studio, configured_draft):
        from unittest.mock import patch

        with patch.dict("merchstudio.workflow.steps.STEP_PREDICATES", {BRAND_DESIGN: lambda d: 1 / 0}):
            assert not studio.is_step_complete(BRAND_DESIGN, configured_draft)


class TestDescribe:

    def test_sidebar_projection(self, studio, configured_draft):
        states = studio.describe(configured_draft)
        assert [s.id for s in states] == [s.id for s in STUDIO_STEPS]
        assert states[0].current
        assert states[0].complete
        assert states[2].reachable
        assert not states[4].reachable


# Run tests
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
