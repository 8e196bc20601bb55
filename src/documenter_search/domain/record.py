"""Documentation record value objects.

Records mirror the entries of Documenter's ``search_index.js``: one entry per
page or section anchor. They are immutable once ingested.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class Category(str, Enum):
    """Kinds of documentation units a record can describe."""

    PAGE = "page"
    SECTION = "section"
    TYPE = "type"
    FUNCTION = "function"


class Record(BaseModel):
    """Value object for one indexed documentation unit.

    ``location`` is the anchor URL fragment and the identity of the record; it
    links search results back into the site.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    location: StrictStr = Field(min_length=1)
    page: StrictStr
    title: StrictStr
    category: Category
    text: StrictStr
