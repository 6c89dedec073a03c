"""Input schemas of the tools exposed to the review model."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


CommitType = Literal["feat", "fix", "docs", "style", "refactor", "test", "chore"]


class FileChangesInput(BaseModel):
    """Input of the file changes tool."""

    rootDir: str = Field(..., min_length=1, description="The root directory")


class FileChangeItem(BaseModel):
    file: str
    diff: str


class CommitMessageInput(BaseModel):
    """Input of the commit message tool."""

    changes: List[FileChangeItem] = Field(
        ...,
        min_length=1,
        description="Array of file changes with diffs",
    )
    type: Optional[CommitType] = Field(
        default=None,
        description="Type of commit (conventional commits)",
    )


class SectionItem(BaseModel):
    heading: str
    content: str


class MetadataItem(BaseModel):
    author: Optional[str] = None
    date: Optional[str] = None
    tags: Optional[List[str]] = None


class MarkdownFileInput(BaseModel):
    """Input of the markdown file tool."""

    title: str = Field(..., description="Title of the markdown document")
    content: str = Field(..., description="Main content of the markdown document")
    outputPath: str = Field(..., description="Path where the markdown file should be saved")
    sections: Optional[List[SectionItem]] = Field(
        default=None,
        description="Optional sections to add to the document",
    )
    metadata: Optional[MetadataItem] = Field(
        default=None,
        description="Optional metadata for the document",
    )
