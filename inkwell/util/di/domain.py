"""Domain layer DI providers."""

from dishka import Scope, provide

from inkwell.domain.service import (
    CommentService,
    JWTService,
    PostService,
    UserService,
)
from inkwell.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services, wired from their constructor annotations.

    Services holding a repository are REQUEST-scoped like the session behind
    it; live threads open a fresh scope for every store operation.
    """

    scope = Scope.REQUEST

    comment_service = provide(CommentService)
    post_service = provide(PostService)
    user_service = provide(UserService)

    # Stateless, only reads the auth settings
    jwt_service = provide(JWTService, scope=Scope.APP)
