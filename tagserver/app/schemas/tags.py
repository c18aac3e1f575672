from pydantic import BaseModel


class TagDescription(BaseModel):
    en: str = ""
    de: str = ""
    es: str = ""
    it: str = ""


class ProjectedTag(BaseModel):
    path: str
    group: str
    writable: bool
    type: str
    description: TagDescription


class TagsDocument(BaseModel):
    tags: list[ProjectedTag]
