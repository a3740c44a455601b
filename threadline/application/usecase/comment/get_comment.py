"""Get comment use case."""

from pydantic import BaseModel

from threadline.application.usecase.base import BaseUseCase, parse_id
from threadline.domain.model import CommentView
from threadline.domain.service import CommentService
from threadline.domain.value import CommentId


class GetCommentRequest(BaseModel):
    """Get comment request."""

    comment_id: str


class GetCommentResponse(BaseModel):
    """Get comment response."""

    comment: CommentView


class GetCommentUseCase(BaseUseCase):
    """Use case for reading a single comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentRequest) -> GetCommentResponse:
        """Execute get comment flow.

        Raises:
            InvalidInputError: If the comment ID is malformed
            NotFoundError: If the comment doesn't exist or is deleted
        """
        comment_id = CommentId(parse_id(request.comment_id, "comment_id"))
        comment = await self.comment_service.get_by_id(comment_id)
        return GetCommentResponse(comment=comment)
