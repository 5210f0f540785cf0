from sqlalchemy import Boolean, Column, Date, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from .database import Base


class Area(Base):
    __tablename__ = "areas"

    id = Column(Integer, primary_key=True, index=True)
    description = Column(String, nullable=False)


class CleaningTaskTemplate(Base):
    __tablename__ = "cleaning_task_templates"

    id = Column(Integer, primary_key=True, index=True)
    description = Column(String, nullable=False)
    area_id = Column(Integer, ForeignKey("areas.id"), nullable=False)
    area = relationship("Area")


class CleaningTaskTemplateList(Base):
    __tablename__ = "cleaning_task_template_lists"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    links = relationship(
        "CleaningTaskTemplateListToCleaningTaskTemplate",
        back_populates="cleaning_task_template_list",
        passive_deletes=True
    )


class CleaningTaskTemplateListToCleaningTaskTemplate(Base):
    __tablename__ = "cleaning_task_template_list_templates"
    __table_args__ = (
        UniqueConstraint("cleaning_task_template_list_id", "cleaning_task_template_id"),
    )

    # Surrogate key keeps the order templates were added in
    id = Column(Integer, primary_key=True)
    cleaning_task_template_list_id = Column(
        Integer, ForeignKey("cleaning_task_template_lists.id", ondelete="CASCADE"), nullable=False, index=True
    )
    cleaning_task_template_id = Column(
        Integer, ForeignKey("cleaning_task_templates.id", ondelete="CASCADE"), nullable=False
    )
    cleaning_task_template_list = relationship("CleaningTaskTemplateList", back_populates="links")


class CleaningTaskList(Base):
    __tablename__ = "cleaning_task_lists"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False)
    manager_signature = Column(String, nullable=True)
    staff_member_signature = Column(String, nullable=True)
    # Payroll number from the staff directory; not a foreign key
    staff_member_id = Column(Integer, nullable=True)
    cleaning_tasks = relationship("CleaningTask", back_populates="cleaning_task_list", passive_deletes=True)


class CleaningTask(Base):
    __tablename__ = "cleaning_tasks"

    id = Column(Integer, primary_key=True, index=True)
    description = Column(String, nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    cleaning_task_list_id = Column(
        Integer, ForeignKey("cleaning_task_lists.id", ondelete="CASCADE"), nullable=False, index=True
    )
    area_id = Column(Integer, ForeignKey("areas.id"), nullable=False)
    cleaning_task_list = relationship("CleaningTaskList", back_populates="cleaning_tasks")
    area = relationship("Area")
