"""Base service class for domain services."""


class Service:
    """Marker base for domain services.

    A service owns the rules around one aggregate (post, comment, user) and
    talks to its store only through the repository interface.
    """
