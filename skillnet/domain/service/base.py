"""Base class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold lifecycle rules that span the request, its
    responses and the viewer-scoped hidden marks.
    """

    pass
