"""Pydantic model for workspace listings."""

from pydantic import BaseModel, Field


class Workspace(BaseModel):
    """A named workspace directory under the root."""

    name: str = Field(description="Workspace name (directory base name)")
    path: str = Field(description="Absolute path to the workspace directory")
