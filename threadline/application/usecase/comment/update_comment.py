"""Update comment use case."""

from pydantic import BaseModel

from threadline.application.usecase.base import BaseUseCase, parse_id
from threadline.domain.model import CommentView
from threadline.domain.service import CommentService, JWTService
from threadline.domain.value import CommentId


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str  # UUID string
    content: str  # New content (required, cannot be blank)
    auth_token: str | None = None  # JWT of the requester (must be author)


class UpdateCommentResponse(BaseModel):
    """Update comment response."""

    comment: CommentView


class UpdateCommentUseCase(BaseUseCase):
    """Use case for editing a comment's content."""

    def __init__(
        self,
        comment_service: CommentService,
        jwt_service: JWTService,
    ) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment service
            jwt_service: JWT service for identifying the requester
        """
        self.comment_service = comment_service
        self.jwt_service = jwt_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Args:
            request: Update comment request with comment ID and new content

        Returns:
            Updated comment

        Raises:
            UnauthenticatedError: If the token is missing or invalid
            NotFoundError: If the comment doesn't exist or is deleted
            ForbiddenError: If the requester doesn't own the comment
        """
        requester_id = self.jwt_service.require_user_id(request.auth_token)
        comment_id = CommentId(parse_id(request.comment_id, "comment_id"))

        comment = await self.comment_service.update(
            comment_id=comment_id,
            requester_id=requester_id,
            content=request.content,
        )
        return UpdateCommentResponse(comment=comment)
