"""
Variants describing where a new cleaning task or template gets its data from.

Callers that receive loose optional fields (the HTTP routes) turn them into
exactly one variant with the ``resolve_*`` helpers; any other combination of
supplied and omitted fields is rejected with a 400.
"""
from dataclasses import dataclass
from typing import Optional, Union

from .errors import ServerError


@dataclass(frozen=True)
class ExistingArea:
    area_id: int


@dataclass(frozen=True)
class NewArea:
    area_description: str


AreaSource = Union[ExistingArea, NewArea]


@dataclass(frozen=True)
class FromTemplate:
    cleaning_task_template_id: int


@dataclass(frozen=True)
class NewWithExistingArea:
    description: str
    area_id: int


@dataclass(frozen=True)
class NewWithNewArea:
    description: str
    area_description: str


TaskSource = Union[FromTemplate, NewWithExistingArea, NewWithNewArea]


def resolve_area_source(area_id: Optional[int] = None,
                        area_description: Optional[str] = None) -> AreaSource:
    if area_id is not None and area_description is None:
        return ExistingArea(area_id)
    if area_id is None and area_description is not None:
        return NewArea(area_description)
    raise ServerError("Invalid arguments supplied", 400)


def resolve_task_source(cleaning_task_template_id: Optional[int] = None,
                        cleaning_task_description: Optional[str] = None,
                        area_description: Optional[str] = None,
                        area_id: Optional[int] = None) -> TaskSource:
    supplied = (
        cleaning_task_template_id is not None,
        cleaning_task_description is not None,
        area_description is not None,
        area_id is not None,
    )
    if supplied == (True, False, False, False):
        return FromTemplate(cleaning_task_template_id)
    if supplied == (False, True, False, True):
        return NewWithExistingArea(cleaning_task_description, area_id)
    if supplied == (False, True, True, False):
        return NewWithNewArea(cleaning_task_description, area_description)
    raise ServerError("invalid parameters supplied for creating a cleaning task", 400)
