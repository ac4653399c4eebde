"""Workout templates - save and reload workout structure."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from gym_assistant.api.deps import get_templates
from gym_assistant.schemas.session import TemplateSaveResult
from gym_assistant.schemas.template import WorkoutTemplate, WorkoutTemplateBase, WorkoutTemplateWrite
from gym_assistant.services.templates import TemplateManager

router = APIRouter()


@router.get("", response_model=list[WorkoutTemplate])
async def list_templates(templates: TemplateManager = Depends(get_templates)):
    """List all workout templates in creation order."""
    return templates.list_templates()


@router.post("", response_model=TemplateSaveResult)
async def save_template(
    payload: WorkoutTemplateWrite,
    templates: TemplateManager = Depends(get_templates),
):
    """Create (no id) or replace (known id) a template.

    status=rejected once the cap is reached or when a slot newly references an
    archived exercise; unknown exercise ids are 404.
    """
    status, template = templates.save(payload)
    return TemplateSaveResult(status=status, template=template)


@router.get("/{template_id}", response_model=WorkoutTemplate)
async def get_template(
    template_id: str,
    templates: TemplateManager = Depends(get_templates),
):
    """Get a template with its planned exercises."""
    return templates.get(template_id)


@router.put("/{template_id}", response_model=TemplateSaveResult)
async def put_template(
    template_id: str,
    payload: WorkoutTemplateBase,
    templates: TemplateManager = Depends(get_templates),
):
    """Upsert a template under the given id."""
    status, template = templates.save(
        WorkoutTemplateWrite(id=template_id, name=payload.name, exercises=payload.exercises)
    )
    return TemplateSaveResult(status=status, template=template)


@router.delete("/{template_id}", status_code=204)
async def delete_template(
    template_id: str,
    templates: TemplateManager = Depends(get_templates),
):
    """Delete a template. Archived sessions started from it are unaffected."""
    if not templates.delete(template_id):
        raise HTTPException(status_code=404, detail="Template not found")
    return None
