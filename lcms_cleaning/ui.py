from fastapi import APIRouter, Depends

from .auth import authenticate_all_users, authenticate_manager
from .routes import get_service
from .service import CleaningService

# Listings backing the client's pages
router = APIRouter(prefix="/api/ui")


@router.get("/cleaning-task-template-lists", dependencies=[Depends(authenticate_manager)])
def get_cleaning_task_template_lists(service: CleaningService = Depends(get_service)):
    return {"cleaning_task_template_lists": service.get_cleaning_task_template_lists()}


@router.get("/cleaning-task-templates/{cleaning_task_template_list_id}", dependencies=[Depends(authenticate_manager)])
def get_cleaning_task_templates_from_list(cleaning_task_template_list_id: int,
                                          service: CleaningService = Depends(get_service)):
    cleaning_task_templates = service.get_cleaning_task_templates_from_cleaning_task_template_list(
        cleaning_task_template_list_id
    )
    return {"cleaning_task_templates": cleaning_task_templates}


@router.get("/cleaning-task-templates", dependencies=[Depends(authenticate_manager)])
def get_cleaning_task_templates(service: CleaningService = Depends(get_service)):
    return {"cleaning_task_templates": service.get_cleaning_task_templates()}


@router.get("/areas", dependencies=[Depends(authenticate_manager)])
def get_areas(service: CleaningService = Depends(get_service)):
    return {"areas": service.get_areas()}


@router.get("/cleaning-task-lists", dependencies=[Depends(authenticate_all_users)])
def get_cleaning_task_lists(service: CleaningService = Depends(get_service)):
    return {"cleaning_task_lists": service.get_cleaning_task_lists()}


@router.get("/cleaning-tasks/{cleaning_task_list_id}", dependencies=[Depends(authenticate_all_users)])
def get_cleaning_tasks(cleaning_task_list_id: int, service: CleaningService = Depends(get_service)):
    return {"cleaning_tasks": service.get_cleaning_tasks(cleaning_task_list_id)}


@router.get("/staff-members", dependencies=[Depends(authenticate_all_users)])
def get_staff_members(service: CleaningService = Depends(get_service)):
    return {"staff_members": service.get_staff_members()}
