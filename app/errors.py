"""Domain error taxonomy shared by services, REST handlers and MCP tools."""


class StudyTrackerError(Exception):
    code = "internal_error"
    status_code = 500

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.code)
        self.detail = detail or self.code


class InvalidRequest(StudyTrackerError):
    """Caller-fixable input problem, detected before the store is touched."""

    code = "invalid_request"
    status_code = 400


class Unauthorized(StudyTrackerError):
    code = "unauthorized"
    status_code = 401


class NotFound(StudyTrackerError):
    """Missing, or owned by someone else. The two cases are never distinguished."""

    code = "not_found"
    status_code = 404


class Conflict(StudyTrackerError):
    code = "conflict"
    status_code = 409


class Internal(StudyTrackerError):
    code = "internal_error"
    status_code = 500
