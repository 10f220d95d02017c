from pydantic import BaseModel, Field, computed_field
from typing import List, Optional


class RedditPost(BaseModel):
    """Single search hit parsed from the Reddit tool payload."""

    title: str
    author: str
    subreddit: str
    url: str
    body: str = ""
    category: Optional[str] = None
    score: Optional[int] = None


class RedditSearchResults(BaseModel):
    """Search hits together with the parameters that produced them."""

    query: str
    subreddit: Optional[str] = None
    sort: str
    time_range: str
    posts: List[RedditPost] = Field(default_factory=list)

    @computed_field(return_type=int)
    @property
    def count(self) -> int:
        return len(self.posts)
