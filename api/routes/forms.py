"""Form definition and wizard evaluation endpoints."""

from fastapi import APIRouter, HTTPException

from api.schemas.requests import EvaluateRequest, NormalizeRequest, PrefillRequest
from api.schemas.responses import (
    EvaluateResponse,
    FieldViewOut,
    FormSummary,
    NormalizeResponse,
    PrefillResponse,
    StepSummary,
)
from formpilot.definitions import FormDefinitionLoader
from formpilot.engine import WizardEngine, build_steps, normalize_report, prefill_from_profile
from formpilot.exceptions import DefinitionNotFoundError
from formpilot.models import FormDefinition

router = APIRouter(prefix="/forms", tags=["Forms"])

# Shared loader instance (set by main.py)
loader: FormDefinitionLoader = None


def set_loader(l: FormDefinitionLoader):
    global loader
    loader = l


def get_definition(category: str) -> FormDefinition:
    """Resolve a category or answer 404."""
    try:
        return loader.get(category)
    except DefinitionNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.to_dict())


@router.get("", response_model=list[FormSummary])
async def list_forms():
    """List the comparison categories that have a form definition."""
    summaries = []
    for category in loader.list_categories():
        definition = loader.get(category)
        summaries.append(
            FormSummary(
                category=definition.category,
                schema_version=definition.schema_version,
                section_count=len(definition.sections),
                field_count=len(definition),
                step_count=len(build_steps(definition.all_fields)),
            )
        )
    return summaries


@router.get("/{category}")
async def get_form(category: str):
    """Full form definition in its document shape."""
    return get_definition(category).to_dict()


@router.post("/{category}/evaluate", response_model=EvaluateResponse)
async def evaluate_form(category: str, request: EvaluateRequest):
    """
    Evaluate a value snapshot: visible steps, errors, progress and the
    fields of the current step.
    """
    engine = WizardEngine(get_definition(category))
    state = engine.evaluate(
        request.values,
        current_step_index=request.step_index,
        touched=frozenset(request.touched),
        submit_attempted=request.submit_attempted,
    )
    return EvaluateResponse(
        category=category,
        steps=[StepSummary(id=s.id, label=s.label, fields=s.field_names) for s in state.steps],
        current_step_index=state.current_step_index,
        current_fields=[FieldViewOut(**view.to_dict()) for view in engine.field_views(state)],
        errors=dict(state.errors),
        displayed_errors=state.displayed_errors,
        progress=state.progress,
        is_valid=state.is_valid,
        is_first_step=state.is_first_step,
        is_last_step=state.is_last_step,
    )


@router.post("/{category}/normalize", response_model=NormalizeResponse)
async def normalize_form(category: str, request: NormalizeRequest):
    """Preview the payload the comparison backend would receive."""
    definition = get_definition(category)
    result = normalize_report(definition.category, request.values)
    return NormalizeResponse(
        category=definition.category,
        payload=result.payload,
        dropped_fields=result.dropped_fields,
    )


@router.post("/{category}/prefill", response_model=PrefillResponse)
async def prefill_form(category: str, request: PrefillRequest):
    """Initial values derived from the user's profile."""
    definition = get_definition(category)
    return PrefillResponse(
        category=definition.category,
        values=prefill_from_profile(definition, request.profile),
    )
