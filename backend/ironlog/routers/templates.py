from fastapi import APIRouter, Depends, HTTPException, Response, status

from ironlog.deps.session import get_gateway, get_workout_session
from ironlog.repositories.gateway import SqlGateway
from ironlog.schemas.template import TemplateCreate, TemplateRecord
from ironlog.services import errors
from ironlog.services.finalizer import template_from_session
from ironlog.services.session import WorkoutSession

router = APIRouter(prefix="/templates", tags=["templates"])

@router.get("", response_model=list[TemplateRecord])
def list_templates(gateway: SqlGateway = Depends(get_gateway)):
    return gateway.get_templates()

@router.post("", response_model=TemplateRecord, status_code=status.HTTP_201_CREATED)
def create_from_session(
    payload: TemplateCreate,
    session: WorkoutSession = Depends(get_workout_session),
    gateway: SqlGateway = Depends(get_gateway),
):
    template = template_from_session(session, payload.name)
    if not template.exercises:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"code": errors.NO_EXERCISES, "message": "The session has no logged exercises yet"},
        )
    if not gateway.upsert_template(template):
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Template could not be saved")
    return template

@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_template(template_id: str, gateway: SqlGateway = Depends(get_gateway)):
    # unknown ids are a no-op
    gateway.delete_template(template_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
