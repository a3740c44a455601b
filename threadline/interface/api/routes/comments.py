"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from threadline.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentRequest,
    GetCommentResponse,
    GetCommentUseCase,
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
    ListRepliesRequest,
    ListRepliesUseCase,
    ReactToCommentRequest,
    ReactToCommentResponse,
    ReactToCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from threadline.domain.value import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    ReactionKind,
    SortMode,
)
from threadline.interface.api.dependencies import get_auth_token

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    content: str
    parent_id: str | None = None  # Parent comment ID for replies


class UpdateCommentAPIRequest(BaseModel):
    """API request for updating a comment."""

    content: str


class ReactAPIRequest(BaseModel):
    """API request for toggling a reaction."""

    type: ReactionKind


@router.post(
    "",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    auth_token: str | None = Depends(get_auth_token),
) -> CreateCommentResponse:
    """Create a top-level comment or reply to another comment.

    Requires authentication.
    """
    return await create_comment_use_case.execute(
        CreateCommentRequest(
            content=request.content,
            parent_id=request.parent_id,
            auth_token=auth_token,
        )
    )


@router.get("", response_model=ListCommentsResponse)
async def list_comments(
    list_comments_use_case: FromDishka[ListCommentsUseCase],
    parent_id: str | None = None,
    page: int = Query(default=DEFAULT_PAGE),
    page_size: int = Query(default=DEFAULT_PAGE_SIZE),
    sort: SortMode = Query(default=SortMode.NEWEST),
) -> ListCommentsResponse:
    """List comments under a parent (top-level when ``parent_id`` is omitted)."""
    return await list_comments_use_case.execute(
        ListCommentsRequest(
            parent_id=parent_id, page=page, page_size=page_size, sort=sort
        )
    )


@router.get("/{comment_id}", response_model=GetCommentResponse)
async def get_comment(
    comment_id: str,
    get_comment_use_case: FromDishka[GetCommentUseCase],
) -> GetCommentResponse:
    """Get a single comment with its reply count."""
    return await get_comment_use_case.execute(GetCommentRequest(comment_id=comment_id))


@router.patch("/{comment_id}", response_model=UpdateCommentResponse)
async def update_comment(
    comment_id: str,
    request: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    auth_token: str | None = Depends(get_auth_token),
) -> UpdateCommentResponse:
    """Edit a comment's content.

    Only the comment author can edit.
    """
    return await update_comment_use_case.execute(
        UpdateCommentRequest(
            comment_id=comment_id, content=request.content, auth_token=auth_token
        )
    )


@router.delete("/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    auth_token: str | None = Depends(get_auth_token),
) -> DeleteCommentResponse:
    """Soft-delete a comment. Only the comment author can delete."""
    return await delete_comment_use_case.execute(
        DeleteCommentRequest(comment_id=comment_id, auth_token=auth_token)
    )


@router.post("/{comment_id}/react", response_model=ReactToCommentResponse)
async def react_to_comment(
    comment_id: str,
    request: ReactAPIRequest,
    react_use_case: FromDishka[ReactToCommentUseCase],
    auth_token: str | None = Depends(get_auth_token),
) -> ReactToCommentResponse:
    """Toggle a like or dislike on a comment."""
    return await react_use_case.execute(
        ReactToCommentRequest(
            comment_id=comment_id, kind=request.type, auth_token=auth_token
        )
    )


@router.get("/{comment_id}/replies", response_model=ListCommentsResponse)
async def list_replies(
    comment_id: str,
    list_replies_use_case: FromDishka[ListRepliesUseCase],
    page: int = Query(default=DEFAULT_PAGE),
    page_size: int = Query(default=DEFAULT_PAGE_SIZE),
    sort: SortMode = Query(default=SortMode.NEWEST),
) -> ListCommentsResponse:
    """List direct replies of a comment."""
    return await list_replies_use_case.execute(
        ListRepliesRequest(
            comment_id=comment_id, page=page, page_size=page_size, sort=sort
        )
    )
