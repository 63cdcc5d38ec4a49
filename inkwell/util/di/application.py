"""Application layer DI providers."""

from dishka import Scope, provide

from inkwell.adapter.storage import ImageStore
from inkwell.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentsUseCase,
    GetReplyChainUseCase,
    GetThreadUseCase,
)
from inkwell.application.usecase.post import (
    CreatePostUseCase,
    DeletePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
    UpdatePostUseCase,
)
from inkwell.application.usecase.user import (
    GetCurrentUserUseCase,
    GetUserProfileUseCase,
    UpdateUserProfileUseCase,
)
from inkwell.config import CommentSettings, StorageSettings
from inkwell.domain.service import (
    CommentService,
    JWTService,
    PostService,
    UserService,
)
from inkwell.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Application use cases provider."""

    scope = Scope.REQUEST

    # Comment use cases
    @provide
    def get_create_comment_use_case(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_service: UserService,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service,
            post_service=post_service,
            user_service=user_service,
        )

    @provide
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide
    def get_comments_use_case(
        self, comment_service: CommentService
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(comment_service=comment_service)

    @provide
    def get_thread_use_case(
        self, comment_service: CommentService, settings: CommentSettings
    ) -> GetThreadUseCase:
        """Provide get thread use case."""
        return GetThreadUseCase(comment_service=comment_service, settings=settings)

    @provide
    def get_reply_chain_use_case(
        self, comment_service: CommentService, settings: CommentSettings
    ) -> GetReplyChainUseCase:
        """Provide get reply chain use case."""
        return GetReplyChainUseCase(comment_service=comment_service, settings=settings)

    # Post use cases
    @provide
    def get_create_post_use_case(
        self,
        post_service: PostService,
        user_service: UserService,
        image_store: ImageStore,
        storage_settings: StorageSettings,
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(
            post_service=post_service,
            user_service=user_service,
            image_store=image_store,
            storage_settings=storage_settings,
        )

    @provide
    def get_post_use_case(
        self, post_service: PostService, comment_service: CommentService
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(
            post_service=post_service, comment_service=comment_service
        )

    @provide
    def get_list_posts_use_case(self, post_service: PostService) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(post_service=post_service)

    @provide
    def get_update_post_use_case(
        self,
        post_service: PostService,
        comment_service: CommentService,
        image_store: ImageStore,
        storage_settings: StorageSettings,
    ) -> UpdatePostUseCase:
        """Provide update post use case."""
        return UpdatePostUseCase(
            post_service=post_service,
            comment_service=comment_service,
            image_store=image_store,
            storage_settings=storage_settings,
        )

    @provide
    def get_delete_post_use_case(
        self, post_service: PostService, comment_service: CommentService
    ) -> DeletePostUseCase:
        """Provide delete post use case."""
        return DeletePostUseCase(
            post_service=post_service, comment_service=comment_service
        )

    # User use cases
    @provide
    def get_current_user_use_case(
        self, jwt_service: JWTService, user_service: UserService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(jwt_service=jwt_service, user_service=user_service)

    @provide
    def get_user_profile_use_case(
        self, user_service: UserService
    ) -> GetUserProfileUseCase:
        """Provide get user profile use case."""
        return GetUserProfileUseCase(user_service=user_service)

    @provide
    def get_update_user_profile_use_case(
        self,
        user_service: UserService,
        image_store: ImageStore,
        storage_settings: StorageSettings,
    ) -> UpdateUserProfileUseCase:
        """Provide update user profile use case."""
        return UpdateUserProfileUseCase(
            user_service=user_service,
            image_store=image_store,
            storage_settings=storage_settings,
        )
