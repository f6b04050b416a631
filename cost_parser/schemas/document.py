from pydantic import BaseModel, Field


class PageText(BaseModel):
    text: str = Field(default="", description="Extracted text of a single page")
    page: int = Field(default=1, ge=1)


class DocumentText(BaseModel):
    pages: list[PageText] = Field(default_factory=list)

    @classmethod
    def from_texts(cls, texts: list[str]) -> "DocumentText":
        """Build a document from raw page strings, numbering pages from 1."""

        return cls(pages=[PageText(text=text, page=idx) for idx, text in enumerate(texts, start=1)])

    def joined_text(self) -> str:
        return "\n".join(page.text for page in self.pages)
