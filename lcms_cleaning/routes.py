import logging

from fastapi import APIRouter, Depends, Request

from .auth import authenticate_all_users, authenticate_manager
from .schemas import (
    AddCleaningTaskRequest,
    AddCleaningTaskTemplateRequest,
    AssignStaffMemberRequest,
    CleaningTaskStateRequest,
    CreateCleaningTaskListRequest,
    CreateCleaningTaskTemplateListRequest,
    CreateCleaningTaskTemplateRequest,
    SignOffRequest,
)
from .service import CleaningService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def get_service(request: Request) -> CleaningService:
    return request.app.state.service


def optional(value):
    """Treat empty strings and zero ids as not supplied."""
    return value or None


@router.get("/cleaning-task-lists/{cleaning_task_list_id}", dependencies=[Depends(authenticate_all_users)])
def view_cleaning_task_list(cleaning_task_list_id: int, service: CleaningService = Depends(get_service)):
    logger.info(f"Getting cleaning task list {cleaning_task_list_id}")
    return {"cleaning_task_list": service.view_cleaning_task_list(cleaning_task_list_id)}


@router.get("/cleaning-task-template-lists/{cleaning_task_template_list_id}",
            dependencies=[Depends(authenticate_manager)])
def view_cleaning_task_template_list(cleaning_task_template_list_id: int,
                                     service: CleaningService = Depends(get_service)):
    logger.info(f"Getting cleaning task template list {cleaning_task_template_list_id}")
    return {"cleaning_task_template_list": service.view_cleaning_task_template_list(cleaning_task_template_list_id)}


@router.patch("/cleaning-tasks/complete", dependencies=[Depends(authenticate_all_users)])
def mark_cleaning_task_as_complete(body: CleaningTaskStateRequest, service: CleaningService = Depends(get_service)):
    success_message = service.mark_cleaning_task_as_complete(body.cleaning_task_list_id, body.cleaning_task_id)
    return {"success_message": success_message}


@router.patch("/cleaning-tasks/incomplete", dependencies=[Depends(authenticate_all_users)])
def mark_cleaning_task_as_incomplete(body: CleaningTaskStateRequest, service: CleaningService = Depends(get_service)):
    success_message = service.mark_cleaning_task_as_incomplete(body.cleaning_task_list_id, body.cleaning_task_id)
    return {"success_message": success_message}


@router.patch("/cleaning-task-lists/sign-off/manager", dependencies=[Depends(authenticate_manager)])
def sign_off_manager(body: SignOffRequest, service: CleaningService = Depends(get_service)):
    success_message = service.sign_off_cleaning_task_list_manager(body.cleaning_task_list_id, body.signature)
    return {"success_message": success_message}


@router.patch("/cleaning-task-lists/sign-off/staff-member", dependencies=[Depends(authenticate_all_users)])
def sign_off_staff_member(body: SignOffRequest, service: CleaningService = Depends(get_service)):
    success_message = service.sign_off_cleaning_task_list_staff_member(body.cleaning_task_list_id, body.signature)
    return {"success_message": success_message}


@router.post("/cleaning-tasks", dependencies=[Depends(authenticate_manager)])
def add_cleaning_task(body: AddCleaningTaskRequest, service: CleaningService = Depends(get_service)):
    cleaning_task_id = service.add_cleaning_task_to_cleaning_task_list(
        body.cleaning_task_list_id,
        optional(body.cleaning_task_template_id),
        optional(body.cleaning_task_description),
        optional(body.area_description),
        optional(body.area_id)
    )
    return {"cleaning_task_id": cleaning_task_id}


@router.delete("/cleaning-tasks/{cleaning_task_id}", dependencies=[Depends(authenticate_manager)])
def remove_cleaning_task(cleaning_task_id: int, service: CleaningService = Depends(get_service)):
    return {"success_message": service.remove_cleaning_task_from_cleaning_task_list(cleaning_task_id)}


@router.delete("/cleaning-task-template-lists/{cleaning_task_template_list_id}/templates/{cleaning_task_template_id}",
               dependencies=[Depends(authenticate_manager)])
def remove_cleaning_task_template(cleaning_task_template_list_id: int, cleaning_task_template_id: int,
                                  service: CleaningService = Depends(get_service)):
    success_message = service.remove_cleaning_task_template_from_cleaning_task_template_list(
        cleaning_task_template_list_id, cleaning_task_template_id
    )
    return {"success_message": success_message}


@router.post("/cleaning-task-template-lists/templates", dependencies=[Depends(authenticate_manager)])
def add_cleaning_task_template(body: AddCleaningTaskTemplateRequest, service: CleaningService = Depends(get_service)):
    response = service.add_cleaning_task_template_to_cleaning_task_template_list(
        body.cleaning_task_template_list_id,
        optional(body.cleaning_task_template_id),
        optional(body.cleaning_task_template_description),
        optional(body.area_id),
        optional(body.area_description)
    )
    return {"response": response}


@router.post("/cleaning-task-lists", dependencies=[Depends(authenticate_manager)])
def create_cleaning_task_list(body: CreateCleaningTaskListRequest, service: CleaningService = Depends(get_service)):
    cleaning_task_list_id = service.create_cleaning_task_list(
        body.cleaning_task_template_list_id,
        body.date,
        optional(body.staff_member_id)
    )
    return {"cleaning_task_list_id": cleaning_task_list_id}


@router.delete("/cleaning-task-lists/{cleaning_task_list_id}", dependencies=[Depends(authenticate_manager)])
def delete_cleaning_task_list(cleaning_task_list_id: int, service: CleaningService = Depends(get_service)):
    return {"success_message": service.delete_cleaning_task_list(cleaning_task_list_id)}


@router.post("/cleaning-task-template-lists", dependencies=[Depends(authenticate_manager)])
def create_cleaning_task_template_list(body: CreateCleaningTaskTemplateListRequest,
                                       service: CleaningService = Depends(get_service)):
    cleaning_task_template_list_id = service.create_cleaning_task_template_list(
        body.title, body.cleaning_task_templates
    )
    return {"cleaning_task_template_list_id": cleaning_task_template_list_id}


@router.delete("/cleaning-task-template-lists/{cleaning_task_template_list_id}",
               dependencies=[Depends(authenticate_manager)])
def delete_cleaning_task_template_list(cleaning_task_template_list_id: int,
                                       service: CleaningService = Depends(get_service)):
    return {"success_message": service.delete_cleaning_task_template_list(cleaning_task_template_list_id)}


@router.patch("/cleaning-task-lists/staff-member", dependencies=[Depends(authenticate_manager)])
def assign_staff_member(body: AssignStaffMemberRequest, service: CleaningService = Depends(get_service)):
    success_message = service.assign_staff_member_to_cleaning_task_list(
        body.cleaning_task_list_id, body.staff_member_id
    )
    return {"success_message": success_message}


@router.post("/cleaning-task-templates", dependencies=[Depends(authenticate_manager)])
def create_cleaning_task_template(body: CreateCleaningTaskTemplateRequest,
                                  service: CleaningService = Depends(get_service)):
    cleaning_task_template_id = service.create_cleaning_task_template(
        body.cleaning_task_template_description,
        optional(body.area_id),
        optional(body.area_description)
    )
    return {"cleaning_task_template_id": cleaning_task_template_id}
