"""Application layer DI providers."""

from dishka import Scope, provide

from threadline.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentUseCase,
    ListCommentsUseCase,
    ListRepliesUseCase,
    ReactToCommentUseCase,
    UpdateCommentUseCase,
)
from threadline.domain.service import CommentService, JWTService
from threadline.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService, jwt_service: JWTService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service, jwt_service=jwt_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_comments_use_case(
        self, comment_service: CommentService
    ) -> ListCommentsUseCase:
        """Provide list comments use case."""
        return ListCommentsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_list_replies_use_case(
        self, comment_service: CommentService
    ) -> ListRepliesUseCase:
        """Provide list replies use case."""
        return ListRepliesUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comment_use_case(
        self, comment_service: CommentService
    ) -> GetCommentUseCase:
        """Provide get comment use case."""
        return GetCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self, comment_service: CommentService, jwt_service: JWTService
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(
            comment_service=comment_service, jwt_service=jwt_service
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService, jwt_service: JWTService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            comment_service=comment_service, jwt_service=jwt_service
        )

    @provide(scope=Scope.REQUEST)
    def get_react_to_comment_use_case(
        self, comment_service: CommentService, jwt_service: JWTService
    ) -> ReactToCommentUseCase:
        """Provide react to comment use case."""
        return ReactToCommentUseCase(
            comment_service=comment_service, jwt_service=jwt_service
        )
