"""Create comment use case."""

from pydantic import BaseModel

from threadline.application.usecase.base import BaseUseCase, parse_id
from threadline.domain.model import CommentView
from threadline.domain.service import CommentService, JWTService
from threadline.domain.value import CommentId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    content: str
    parent_id: str | None = None  # Parent comment ID for replies
    auth_token: str | None = None  # JWT of the author


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment: CommentView


class CreateCommentUseCase(BaseUseCase):
    """Use case for posting a top-level comment or a reply."""

    def __init__(
        self,
        comment_service: CommentService,
        jwt_service: JWTService,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            jwt_service: JWT service for identifying the author
        """
        self.comment_service = comment_service
        self.jwt_service = jwt_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            The new comment with its author inlined

        Raises:
            UnauthenticatedError: If the token is missing or invalid
            InvalidInputError: If content or parent ID is malformed
            NotFoundError: If the author or parent comment doesn't exist
        """
        author_id = self.jwt_service.require_user_id(request.auth_token)
        parent_id = (
            CommentId(parse_id(request.parent_id, "parent_id"))
            if request.parent_id
            else None
        )

        comment = await self.comment_service.create(
            author_id=author_id,
            content=request.content,
            parent_id=parent_id,
        )
        return CreateCommentResponse(comment=comment)
