"""
Content CRUD endpoints for the admin area.

Thin adapter over ContentService: parse the request, call the service,
shape the JSON. Errors raised by the service are mapped to status codes by
the exception handlers registered in main.py.
"""

from fastapi import APIRouter, Body, Depends
from typing import Any, Dict, Optional
from dependencies import get_content_service, get_translator
from models.content import KnowledgeEntryCreate
from services.content_service import ContentService
from services.translator import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES, Translator
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


def _dump(record) -> Optional[Dict[str, Any]]:
    return record.model_dump(by_alias=True, mode="json") if record is not None else None


@router.post("/train")
def train(
    payload: KnowledgeEntryCreate,
    content: ContentService = Depends(get_content_service),
):
    """Add a knowledge entry for the AI to draw upon"""
    entry = content.create("training-data", payload.model_dump())
    return {
        "success": True,
        "message": "Training data added successfully",
        "id": entry.id,
        "timestamp": entry.timestamp.isoformat() if entry.timestamp else None,
    }


# Singletons

@router.get("/contact")
def get_contact(content: ContentService = Depends(get_content_service)):
    return {"success": True, "contact": _dump(content.get_contact())}


@router.put("/contact")
def update_contact(
    payload: Dict[str, Any] = Body(...),
    content: ContentService = Depends(get_content_service),
):
    contact = content.update_contact(payload)
    return {"success": True, "contact": _dump(contact), "message": "Contact updated successfully"}


@router.get("/introduction")
def get_introduction(content: ContentService = Depends(get_content_service)):
    return {"success": True, "introduction": _dump(content.get_introduction())}


@router.put("/introduction")
def update_introduction(
    payload: Dict[str, Any] = Body(...),
    content: ContentService = Depends(get_content_service),
):
    introduction = content.update_introduction(payload)
    return {"success": True, "introduction": _dump(introduction), "message": "Introduction updated successfully"}


@router.get("/prompt-examples/active")
def get_active_prompt_examples(
    language: str = DEFAULT_LANGUAGE,
    content: ContentService = Depends(get_content_service),
    translator: Translator = Depends(get_translator),
):
    """Active suggested questions, translated for the visitor's language"""
    examples = content.list_active("prompt-examples")
    if language in SUPPORTED_LANGUAGES and language != DEFAULT_LANGUAGE:
        examples = [
            example.model_copy(update={
                "question": translator.translate_text(example.question, language, "prompt example question")
            })
            for example in examples
        ]
    return {"success": True, "examples": [_dump(e) for e in examples]}


# Registry entities: training-data, projects, experiences, prompt-examples,
# skill-categories, skills

@router.get("/{entity}")
def list_records(entity: str, content: ContentService = Depends(get_content_service)):
    return {"success": True, "data": [_dump(r) for r in content.list_all(entity)]}


@router.get("/{entity}/active")
def list_active_records(entity: str, content: ContentService = Depends(get_content_service)):
    return {"success": True, "data": [_dump(r) for r in content.list_active(entity)]}


@router.get("/{entity}/{record_id}")
def get_record(entity: str, record_id: int, content: ContentService = Depends(get_content_service)):
    return {"success": True, "data": _dump(content.get_by_id(entity, record_id))}


@router.post("/{entity}")
def create_record(
    entity: str,
    payload: Dict[str, Any] = Body(...),
    content: ContentService = Depends(get_content_service),
):
    record = content.create(entity, payload)
    return {"success": True, "message": f"{entity} record added successfully", "data": _dump(record)}


@router.put("/{entity}/{record_id}")
def update_record(
    entity: str,
    record_id: int,
    payload: Dict[str, Any] = Body(...),
    content: ContentService = Depends(get_content_service),
):
    record = content.update(entity, record_id, payload)
    return {"success": True, "message": f"{entity} record updated successfully", "data": _dump(record)}


@router.delete("/{entity}/{record_id}")
def delete_record(entity: str, record_id: int, content: ContentService = Depends(get_content_service)):
    content.delete(entity, record_id)
    return {"success": True, "message": f"{entity} record deleted successfully"}
