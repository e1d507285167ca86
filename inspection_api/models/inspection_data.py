"""
Inspection Data API — InspectionData SQLAlchemy Model
======================================================

What:  ORM model for the `inspection_data` table and the anonymization
       workflow status values it records.
How:   Inherits from the shared DeclarativeBase. Rows are written by the
       ingestion/anonymization pipeline; this service only reads them.
Who:   Queried by SqlInspectionDataService; projected by the response schema.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import DateTime, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from inspection_api.database import Base


class WorkflowStatus(str, Enum):
    """
    Lifecycle stage of the anonymization workflow for an inspection's image.

    Stored as a plain string column, so a row may hold a value outside this
    set. Readers treat such values as unknown rather than failing to load them.
    """

    NOT_STARTED = "NotStarted"
    STARTED = "Started"
    EXIT_SUCCESS = "ExitSuccess"
    EXIT_FAILURE = "ExitFailure"

    @classmethod
    def parse(cls, value: str | None) -> "WorkflowStatus | None":
        """Return the matching member, or None for unknown values."""
        try:
            return cls(value)
        except ValueError:
            return None


class InspectionData(Base):
    """
    One inspection's data record: where its raw and anonymized images live
    and how far the anonymization workflow has come.

    Query Patterns:
        - Page through all records, newest first (idx_inspection_data_date_created)
        - Lookup by internal id (primary key)
        - Lookup by external inspection id (unique index)
    """

    __tablename__ = "inspection_data"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Internal identifier",
    )

    inspection_id: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        unique=True,
        comment="Identifier of the inspection in the robot mission system",
    )

    installation_code: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        default="",
        comment="Installation (plant) the inspection belongs to",
    )

    raw_data_uri: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Blob location of the original image",
    )

    # Only meaningful once the workflow has exited successfully
    anonymized_uri: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Blob location of the anonymized image",
    )

    anonymizer_workflow_status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=WorkflowStatus.NOT_STARTED.value,
        server_default=text("'NotStarted'"),
        comment="NotStarted, Started, ExitSuccess or ExitFailure",
    )

    date_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_inspection_data_date_created", date_created.desc()),
    )

    @property
    def workflow_status(self) -> WorkflowStatus | None:
        return WorkflowStatus.parse(self.anonymizer_workflow_status)

    def __repr__(self) -> str:
        return (
            f"<InspectionData(id={self.id}, inspection_id='{self.inspection_id}', "
            f"status='{self.anonymizer_workflow_status}')>"
        )
