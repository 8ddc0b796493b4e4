"""
v0 Platform API Schemas - Data structures for chat responses.

These Pydantic models represent v0 chat responses in a clean, typed format.
The API has returned files in two shapes over time:
- {"name": "page.tsx", "content": "..."}
- {"lang": "tsx", "meta": {"file": "page.tsx"}, "source": "..."}
Both validate into the same ChatFile.

Reference: https://v0.dev/docs/api/platform
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ChatFile(BaseModel):
    """A single file generated in a chat."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field("", description="File name, e.g. page.tsx")
    content: str = Field("", description="File source text")

    @model_validator(mode="before")
    @classmethod
    def _normalize_platform_shape(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if not data.get("name"):
            meta = data.get("meta")
            meta = meta if isinstance(meta, dict) else {}
            data["name"] = meta.get("file") or meta.get("name") or ""
        if data.get("content") is None:
            data["content"] = data.get("source") or ""
        return data


class Chat(BaseModel):
    """
    A v0 chat (conversation) as returned by create and send-message calls.

    Attributes:
        id: Chat identifier, used for follow-up messages
        web_url: Link to the conversation on v0.dev
        demo: Live preview URL of the latest version
        files: Generated files of the latest version
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    web_url: Optional[str] = Field(None, alias="webUrl")
    demo: Optional[str] = None
    files: List[ChatFile] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _fill_from_latest_version(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        latest = data.get("latestVersion") or {}
        if not isinstance(latest, dict):
            return data
        data = dict(data)
        if not data.get("demo"):
            data["demo"] = latest.get("demoUrl")
        if not data.get("files"):
            data["files"] = latest.get("files") or []
        return data

    def file_names(self) -> List[str]:
        """Names of all returned files, in response order."""
        return [f.name for f in self.files]
