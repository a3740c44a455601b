"""Delete comment use case."""

from pydantic import BaseModel

from threadline.application.usecase.base import BaseUseCase, parse_id
from threadline.domain.service import CommentService, JWTService
from threadline.domain.value import CommentId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str
    auth_token: str | None = None


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    deleted: bool = True


class DeleteCommentUseCase(BaseUseCase):
    """Use case for soft-deleting a comment."""

    def __init__(
        self,
        comment_service: CommentService,
        jwt_service: JWTService,
    ) -> None:
        self.comment_service = comment_service
        self.jwt_service = jwt_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            UnauthenticatedError: If the token is missing or invalid
            NotFoundError: If the comment doesn't exist or is already deleted
            ForbiddenError: If the requester doesn't own the comment
        """
        requester_id = self.jwt_service.require_user_id(request.auth_token)
        comment_id = CommentId(parse_id(request.comment_id, "comment_id"))

        await self.comment_service.delete(comment_id, requester_id)
        return DeleteCommentResponse(comment_id=str(comment_id))
