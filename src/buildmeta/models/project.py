"""Project identity model."""

from pydantic import BaseModel, Field

KEY_PROJECT_NAME = "project-name"
KEY_PROJECT_VERSION = "project-version"
KEY_PROJECT_GROUP_ID = "project-group-id"
KEY_PROJECT_ARTIFACT_ID = "project-artifact-id"


class ProjectInfo(BaseModel):
    """Name, version and coordinates of the project being built."""

    name: str = Field(description="Human readable project name")
    version: str = Field(description="Project version")
    group_id: str = Field(default="", description="Organization or namespace of the project")
    artifact_id: str = Field(description="Distribution name of the project")

    def to_properties(self) -> dict[str, str]:
        """Return the project.properties entries for this project.

        An empty group id is left out, since an empty value cannot be read back.
        """
        properties = {
            KEY_PROJECT_NAME: self.name,
            KEY_PROJECT_VERSION: self.version,
            KEY_PROJECT_ARTIFACT_ID: self.artifact_id,
        }
        if self.group_id:
            properties[KEY_PROJECT_GROUP_ID] = self.group_id
        return properties
