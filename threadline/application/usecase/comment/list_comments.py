"""List comments use cases."""

from pydantic import BaseModel

from threadline.application.usecase.base import BaseUseCase, parse_id
from threadline.domain.model import CommentPage, CommentView
from threadline.domain.service import CommentService
from threadline.domain.value import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    CommentId,
    SortMode,
)


class ListCommentsRequest(BaseModel):
    """List comments request. No ``parent_id`` lists top-level comments."""

    parent_id: str | None = None
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    sort: SortMode = SortMode.NEWEST


class ListRepliesRequest(BaseModel):
    """List replies request."""

    comment_id: str
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    sort: SortMode = SortMode.NEWEST


class ListCommentsResponse(BaseModel):
    """One page of comments."""

    items: list[CommentView]
    total_count: int
    page: int
    total_pages: int

    @classmethod
    def from_page(cls, page: CommentPage) -> "ListCommentsResponse":
        return cls(
            items=page.items,
            total_count=page.total_count,
            page=page.page,
            total_pages=page.total_pages,
        )


class ListCommentsUseCase(BaseUseCase):
    """Use case for paging through comments under a parent."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize list comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: ListCommentsRequest) -> ListCommentsResponse:
        """Execute list comments flow.

        Raises:
            InvalidInputError: If parent ID or pagination is malformed
        """
        parent_id = (
            CommentId(parse_id(request.parent_id, "parent_id"))
            if request.parent_id
            else None
        )
        page = await self.comment_service.list_comments(
            parent_id=parent_id,
            page=request.page,
            page_size=request.page_size,
            sort=request.sort,
        )
        return ListCommentsResponse.from_page(page)


class ListRepliesUseCase(BaseUseCase):
    """Use case for paging through the direct replies of a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: ListRepliesRequest) -> ListCommentsResponse:
        comment_id = CommentId(parse_id(request.comment_id, "comment_id"))
        page = await self.comment_service.list_replies(
            parent_id=comment_id,
            page=request.page,
            page_size=request.page_size,
            sort=request.sort,
        )
        return ListCommentsResponse.from_page(page)
