from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


def _text(v) -> str:
    return "" if v is None else str(v)


def _optional_text(v) -> Optional[str]:
    if v is None:
        return None
    s = str(v)
    return s if s.strip() else None


@dataclass
class Subsection:
    title: str
    content: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Subsection":
        return cls(title=_text(data.get("title")), content=_text(data.get("content")))


@dataclass
class Section:
    """
    Top-level content block. Content renders only when there are no
    subsections; an empty title means no heading.
    """

    title: str = ""
    content: str = ""
    subsections: List[Subsection] = field(default_factory=list)
    id: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Section":
        subs = data.get("subsections") or []
        return cls(
            title=_text(data.get("title")),
            content=_text(data.get("content")),
            subsections=[Subsection.from_dict(s) for s in subs if isinstance(s, dict)],
            id=_text(data.get("id")),
        )


@dataclass
class Faq:
    question: str
    answer: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Faq":
        return cls(question=_text(data.get("question")), answer=_text(data.get("answer")))


@dataclass
class Image:
    name: str = ""
    alt: str = ""

    @classmethod
    def from_value(cls, data) -> "Image":
        if isinstance(data, Image):
            return data
        if isinstance(data, str):
            return cls(name=data)
        if not isinstance(data, dict):
            return cls()
        return cls(name=_text(data.get("name")), alt=_text(data.get("alt")))


@dataclass
class BlogDocument:
    """
    Canonical render input, assembled fresh per render from field input,
    decoded form fields, a JSON body or extracted document sections.
    """

    title: str = ""
    category: str = ""
    author: str = ""
    date: Optional[str] = None
    sections: List[Section] = field(default_factory=list)
    faqs: List[Faq] = field(default_factory=list)
    feature_image: Image = field(default_factory=Image)
    content_image: Image = field(default_factory=Image)
    video_url: Optional[str] = None
    custom_json_ld: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BlogDocument":
        """
        Build from the JSON wire shape (camelCase keys, snake_case accepted).
        """

        def pick(*keys):
            for k in keys:
                if data.get(k) is not None:
                    return data[k]
            return None

        date_value = pick("date")
        # YAML sources load bare dates as `date` objects
        if hasattr(date_value, "isoformat"):
            date_value = date_value.isoformat()
        return cls(
            title=_text(pick("title")),
            category=_text(pick("category")),
            author=_text(pick("author")),
            date=_optional_text(date_value),
            sections=[
                Section.from_dict(s) for s in (pick("sections") or []) if isinstance(s, dict)
            ],
            faqs=[Faq.from_dict(f) for f in (pick("faqs") or []) if isinstance(f, dict)],
            feature_image=Image.from_value(pick("featureImage", "feature_image", "imageInfo")),
            content_image=Image.from_value(pick("contentImage", "content_image")),
            video_url=_optional_text(pick("videoUrl", "video_url")),
            custom_json_ld=_optional_text(pick("customJsonLD", "jsonLD", "custom_json_ld")),
        )

    def missing_fields(self) -> List[str]:
        """
        Fields a caller must supply before publishing; rendering itself
        does not require them.
        """
        missing = []
        if not self.title.strip():
            missing.append("title")
        if not self.category.strip():
            missing.append("category")
        if not self.sections:
            missing.append("sections")
        return missing


@dataclass
class IndexEntry:
    title: str
    date: str
    image: str
    link: str
    category: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IndexEntry":
        return cls(
            title=_text(data.get("title")),
            date=_text(data.get("date")),
            image=_text(data.get("image")),
            link=_text(data.get("link")),
            category=_text(data.get("category")),
        )

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)
