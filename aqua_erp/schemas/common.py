from pydantic import BaseModel


class Pagination(BaseModel):
    current_page: int
    page_size: int
    total_count: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool


class MessageResponse(BaseModel):
    status: bool = True
    message: str
