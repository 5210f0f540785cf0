import datetime
from typing import List, Optional

from pydantic import BaseModel


class CleaningTaskStateRequest(BaseModel):
    cleaning_task_list_id: int
    cleaning_task_id: int


class SignOffRequest(BaseModel):
    cleaning_task_list_id: int
    signature: str


class AddCleaningTaskRequest(BaseModel):
    cleaning_task_list_id: int
    cleaning_task_template_id: Optional[int] = None
    cleaning_task_description: Optional[str] = None
    area_description: Optional[str] = None
    area_id: Optional[int] = None


class AddCleaningTaskTemplateRequest(BaseModel):
    cleaning_task_template_list_id: int
    cleaning_task_template_id: Optional[int] = None
    cleaning_task_template_description: Optional[str] = None
    area_id: Optional[int] = None
    area_description: Optional[str] = None


class CreateCleaningTaskListRequest(BaseModel):
    cleaning_task_template_list_id: int
    date: datetime.date
    staff_member_id: Optional[int] = None


class CreateCleaningTaskTemplateListRequest(BaseModel):
    title: str
    cleaning_task_templates: List[int]


class AssignStaffMemberRequest(BaseModel):
    cleaning_task_list_id: int
    staff_member_id: int


class CreateCleaningTaskTemplateRequest(BaseModel):
    cleaning_task_template_description: str
    area_id: Optional[int] = None
    area_description: Optional[str] = None
