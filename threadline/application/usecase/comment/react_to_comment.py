"""React to comment use case."""

from pydantic import BaseModel, ConfigDict, Field

from threadline.application.usecase.base import BaseUseCase, parse_id
from threadline.domain.model import CommentView
from threadline.domain.service import CommentService, JWTService
from threadline.domain.value import CommentId, ReactionKind


class ReactToCommentRequest(BaseModel):
    """React to comment request."""

    comment_id: str
    kind: ReactionKind = Field(alias="type")
    auth_token: str | None = None

    model_config = ConfigDict(populate_by_name=True)


class ReactToCommentResponse(BaseModel):
    """React to comment response."""

    comment: CommentView


class ReactToCommentUseCase(BaseUseCase):
    """Use case for toggling a like or dislike."""

    def __init__(
        self,
        comment_service: CommentService,
        jwt_service: JWTService,
    ) -> None:
        """Initialize react to comment use case.

        Args:
            comment_service: Comment domain service
            jwt_service: JWT service for identifying the reacting user
        """
        self.comment_service = comment_service
        self.jwt_service = jwt_service

    async def execute(self, request: ReactToCommentRequest) -> ReactToCommentResponse:
        """Execute reaction toggle.

        Reacting twice with the same kind removes the reaction; switching
        kind replaces it.

        Raises:
            UnauthenticatedError: If the token is missing or invalid
            NotFoundError: If the comment doesn't exist or is deleted
        """
        user_id = self.jwt_service.require_user_id(request.auth_token)
        comment_id = CommentId(parse_id(request.comment_id, "comment_id"))

        comment = await self.comment_service.react(comment_id, user_id, request.kind)
        return ReactToCommentResponse(comment=comment)
