"""
Error taxonomy for the content engine.

Every error carries a stable ``code`` and the HTTP status the API layer
maps it to. Messages are written for the editor, not the developer.
"""


class CmsError(Exception):
    code = "CmsError"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.message}


class NotFound(CmsError):
    """Entity is absent or belongs to another tenant."""

    code = "NotFound"
    status_code = 404


class InvalidState(CmsError):
    """Operation would break a content invariant (home page, slugs, lifecycle)."""

    code = "InvalidState"
    status_code = 400


class PermissionDenied(CmsError):
    code = "PermissionDenied"
    status_code = 403


class EditConflict(CmsError):
    """The entity changed after the client last read it."""

    code = "EditConflict"
    status_code = 409


class PersistenceFailure(CmsError):
    """
    The underlying store rejected a write.

    ``state_preserved`` tells the caller that the transaction was rolled
    back and the previously committed state is untouched.
    """

    code = "PersistenceFailure"
    status_code = 500

    def __init__(self, message: str, *, state_preserved: bool = True):
        super().__init__(message)
        self.state_preserved = state_preserved

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["state_preserved"] = self.state_preserved
        return data
